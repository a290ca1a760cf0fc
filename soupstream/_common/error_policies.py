"""
Error handling policies for soupstream stream stages.

User-supplied predicates and transforms run inside background producers.
When one of them raises, the stage hands the exception to the stream's
policy, which either re-raises it (ending the stream and surfacing the
error to the consumer) or records it and asks the stage to skip the node.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors raised
    by user callables while a stream is producing.
    """

    @abstractmethod
    def handle(self, error: Exception, stage: str, node: Any) -> bool:
        """
        Handle an error raised while a stage processed a node.

        Args:
            error: The exception that was raised
            stage: Name of the stage that failed (e.g. 'filter', 'map')
            node: The node being processed when the error occurred

        Returns:
            True to skip the node and keep producing. Policies that want
            the stream to stop re-raise instead of returning.
        """
        pass

    def _record(self, errors: List[Dict[str, Any]], error: Exception,
                stage: str, node: Any) -> Dict[str, Any]:
        record = {
            'node': node,
            'stage': stage,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        errors.append(record)
        return record


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the stream.

    This is the default: the producer ends, its upstream is closed, and
    the consumer's next read raises the original exception.
    """

    def handle(self, error: Exception, stage: str, node: Any) -> bool:
        """Re-raise the error immediately."""
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs errors and skips the offending node.

    Errors are collected for later inspection. A pipeline shares one policy
    across its stage workers, so recording is guarded by a lock.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning each time an error occurs
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose
        self._lock = threading.Lock()

    def handle(self, error: Exception, stage: str, node: Any) -> bool:
        with self._lock:
            self._record(self.errors, error, stage, node)
        if self.verbose:
            logger.warning("Skipping %r: error in %s stage: %s", node, stage, error)
        return True

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        with self._lock:
            errors = list(self.errors)
        by_stage: Dict[str, int] = {}
        for record in errors:
            by_stage[record['stage']] = by_stage.get(record['stage'], 0) + 1
        return {
            'total_errors': len(errors),
            'by_stage': by_stage,
            'errors': errors,
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all errors without logging, for batch processing.
    """

    def __init__(self):
        super().__init__(verbose=False)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails.

    Useful when a few bad nodes are expected but many indicate a broken
    predicate.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, log a warning for each tolerated error
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def handle(self, error: Exception, stage: str, node: Any) -> bool:
        """Skip the node if under threshold, otherwise raise."""
        with self._lock:
            self.error_count += 1
            count = self.error_count
            self._record(self.errors, error, stage, node)

        if count > self.max_errors:
            raise RuntimeError(
                f"Error threshold exceeded ({self.max_errors} errors)"
            ) from error

        if self.verbose:
            logger.warning("[%d/%d] Skipping %r: error in %s stage: %s",
                           count, self.max_errors, node, stage, error)
        return True

    def get_statistics(self) -> dict:
        return {
            'total_errors': self.error_count,
            'max_errors': self.max_errors,
            'errors': list(self.errors),
        }

"""Configuration for soupstream node streams.

A StreamConfig describes how a stream is produced: how large its buffer
is, how often blocked producers re-check for cancellation, whether text
payloads are normalized, and which error policy stages use.
"""

from dataclasses import dataclass
from typing import List, Optional

from .error_policies import ErrorPolicy, FailFastPolicy
from .errors import InvalidArgumentError

NODE_BUFFER_SIZE = 20


@dataclass
class StreamConfig:
    """Complete configuration for a node stream.

    The same config is carried by every stage derived from a stream, so a
    pipeline shares one buffer size and one error policy.
    """

    # Capacity of each stage's internal buffer
    buffer_size: int = NODE_BUFFER_SIZE

    # Seconds a blocked put/get waits before re-checking the cancel flag
    poll_interval: float = 0.05

    # Normalize text payloads (strip surrounding whitespace) as they are yielded
    trim_text: bool = True

    # Policy for errors raised by predicates and transforms
    error_policy: Optional[ErrorPolicy] = None

    # Prefix for worker thread names and producer task names
    thread_name_prefix: str = "soupstream"

    @classmethod
    def raw(cls) -> 'StreamConfig':
        """Create config that yields text payloads exactly as parsed."""
        return cls(trim_text=False)

    @classmethod
    def low_latency(cls) -> 'StreamConfig':
        """Create config with a one-slot buffer and a short poll interval.

        Producers stay at most one node ahead of the consumer.
        """
        return cls(buffer_size=1, poll_interval=0.01)

    def policy(self) -> ErrorPolicy:
        """Return the configured error policy, or a new fail-fast one.

        The config itself is left unchanged.
        """
        if self.error_policy is None:
            return FailFastPolicy()
        return self.error_policy

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.buffer_size < 1:
            errors.append("buffer_size must be at least 1")

        if self.poll_interval <= 0:
            errors.append("poll_interval must be positive")

        if self.error_policy is not None and not isinstance(self.error_policy, ErrorPolicy):
            errors.append("error_policy must be an ErrorPolicy instance")

        return errors


def resolve_config(config: Optional[StreamConfig]) -> StreamConfig:
    """Return config (or a default one), raising if it is invalid.

    Raises:
        InvalidArgumentError: Listing every validation problem
    """
    if config is None:
        return StreamConfig()
    errors = config.validate()
    if errors:
        raise InvalidArgumentError(f"Invalid stream configuration: {'; '.join(errors)}")
    return config

"""Thread-backed node streams.

A NodeStream is a single-use iterator over nodes produced by one background
worker thread into a bounded buffer. Streams chain: ``filter``, ``map`` and
``limit`` each return a new stream whose worker reads from the previous
one. Closing a stream closes every stream it was derived from, so the
traversal at the head of the pipeline stops producing.

Example:
    with descendants(doc).filter(is_tag("a")).limit(10) as links:
        for link in links:
            print(link.attr_or_default("href", ""))

A stream that is read to the end needs no explicit close. A stream that is
abandoned early should be closed, or used as a context manager.
"""

import itertools
import logging
import queue
import threading
import time
import weakref
from typing import Callable, Iterator, List, Optional

from ..._common.config import StreamConfig
from ..._common.error_policies import ErrorPolicy
from ..._common.errors import InvalidArgumentError, StreamStateError
from ..._common.node import Node

logger = logging.getLogger(__name__)

_END = object()
_ids = itertools.count(1)


class _Failure:
    """Marks the end of a stream whose producer raised."""

    def __init__(self, error: Exception):
        self.error = error


def _offer(out: queue.Queue, item, cancel: threading.Event, poll_interval: float) -> bool:
    """Put item into out unless cancel is set first.

    Returns:
        True if the item was delivered, False if the stream was cancelled
    """
    while not cancel.is_set():
        try:
            out.put(item, timeout=poll_interval)
            return True
        except queue.Full:
            continue
    return False


def _release(cancel: threading.Event, upstream: Optional["NodeStream"]) -> None:
    """Finalizer body: stop an unreferenced stream and the stages feeding it."""
    cancel.set()
    if upstream is not None:
        upstream.close()


def _produce(items: Iterator[Node],
             out: queue.Queue,
             cancel: threading.Event,
             poll_interval: float,
             label: str) -> None:
    """Worker body: move items into the buffer until exhausted or cancelled."""
    try:
        for item in items:
            if not _offer(out, item, cancel, poll_interval):
                logger.debug("%s: cancelled, producer stopping", label)
                return
        _offer(out, _END, cancel, poll_interval)
    except Exception as e:
        logger.debug("%s: producer failed", label, exc_info=True)
        _offer(out, _Failure(e), cancel, poll_interval)
    finally:
        close = getattr(items, 'close', None)
        if close is not None:
            close()


class NodeStream:
    """Single-use, bounded-buffer stream of nodes.

    Lifecycle: a stream is *producing* until either its producer signals the
    end of the sequence (*drained*) or a consumer calls ``close()``
    (*closed*). A drained stream also reports ``closed``.

    Args:
        source: Callable receiving the stream's cancel flag and returning the
                iterator the worker drains
        config: Stream configuration shared by every derived stage
        upstream: Stream this one reads from, closed along with this one
        name: Short label used in thread names and log records
    """

    def __init__(self,
                 source: Callable[[threading.Event], Iterator[Node]],
                 config: StreamConfig,
                 upstream: Optional['NodeStream'] = None,
                 name: str = "stream"):
        self._config = config
        self._upstream = upstream
        self._name = name
        self._label = f"{name}#{next(_ids)}"

        self._queue: queue.Queue = queue.Queue(maxsize=config.buffer_size)
        self._cancel = threading.Event()
        self._lock = threading.RLock()
        self._closed = False
        self._drained = False
        self._has_reader = False

        # An unreferenced stream can no longer be read; let its worker and
        # every stage feeding it go.
        self._finalizer = weakref.finalize(self, _release, self._cancel, upstream)

        # The worker must not hold a reference to self.
        self._worker = threading.Thread(
            target=_produce,
            args=(source(self._cancel), self._queue, self._cancel,
                  config.poll_interval, self._label),
            name=f"{config.thread_name_prefix}-{self._label}",
            daemon=True,
        )
        self._worker.start()
        logger.debug("%s: started", self._label)

    # Lifecycle

    @property
    def closed(self) -> bool:
        """True once the stream was closed or drained."""
        return self._closed

    @property
    def drained(self) -> bool:
        """True once the producer reached the end of the sequence."""
        return self._drained

    @property
    def config(self) -> StreamConfig:
        return self._config

    def close(self) -> None:
        """Stop reading from this stream.

        No node is delivered after this returns. The cancel flag of this
        stream and of every stream it was derived from is set, so every
        producer in the pipeline stops at its next checkpoint. Calling it
        again, or after the stream drained, does nothing.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._cancel.set()
        logger.debug("%s: closed", self._label)
        if self._upstream is not None:
            self._upstream.close()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the workers of this stream and its upstream stages to end.

        Args:
            timeout: Overall seconds to wait (None waits without limit)

        Returns:
            True if every worker in the pipeline has terminated
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        stream: Optional[NodeStream] = self
        while stream is not None:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            stream._worker.join(remaining)
            if stream._worker.is_alive():
                return False
            stream = stream._upstream
        return True

    def _mark_drained(self) -> None:
        with self._lock:
            self._drained = True
            self._closed = True
        self._finalizer.detach()
        logger.debug("%s: drained", self._label)

    # Iteration

    def __iter__(self) -> 'NodeStream':
        return self

    def __next__(self) -> Node:
        if self._closed:
            raise StopIteration
        self._has_reader = True

        poll_interval = self._config.poll_interval
        while True:
            if self._closed:
                raise StopIteration
            try:
                item = self._queue.get(timeout=poll_interval)
                break
            except queue.Empty:
                if not self._worker.is_alive() and self._queue.empty():
                    # Producer went away without an end marker.
                    self._mark_drained()
                    raise StopIteration

        if item is _END:
            self._mark_drained()
            raise StopIteration
        if isinstance(item, _Failure):
            self._mark_drained()
            raise item.error
        return item

    def __enter__(self) -> 'NodeStream':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Stages

    def filter(self, predicate: Callable[[Node], bool]) -> 'NodeStream':
        """Return a stream of the nodes for which predicate is true."""
        policy = self._config.policy()
        return self._derive('filter', lambda cancel: _filter_items(self, predicate, policy, cancel))

    def map(self, transform: Callable[[Node], Node]) -> 'NodeStream':
        """Return a stream of transform(node) for every node, in order."""
        policy = self._config.policy()
        return self._derive('map', lambda cancel: _map_items(self, transform, policy, cancel))

    def limit(self, n: int) -> 'NodeStream':
        """Return a stream of exactly the first n nodes.

        Once the n-th node has been read from this stream, this stream is
        closed; the returned stream then delivers what it holds and ends.

        Raises:
            InvalidArgumentError: If n is negative
        """
        if n < 0:
            raise InvalidArgumentError(f"limit must not be negative, got {n}")
        return self._derive('limit', lambda cancel: _limit_items(self, n, self._label, cancel))

    def _derive(self, stage: str, source: Callable[[threading.Event], Iterator[Node]]) -> 'NodeStream':
        with self._lock:
            if self._has_reader:
                raise StreamStateError(
                    f"{self._label} already has a reader; streams are single-use"
                )
            self._has_reader = True
        return NodeStream(source, self._config, upstream=self, name=stage)

    # Terminal consumers

    def first(self) -> Optional[Node]:
        """Return the first node and close the stream, or None if it is empty."""
        try:
            node = next(self)
        except StopIteration:
            return None
        self.close()
        return node

    def all(self) -> List[Node]:
        """Drain the stream into a list, in delivery order."""
        return list(self)

    def apply(self, f: Callable[[Node], None]) -> int:
        """Call f on each node in order.

        If f raises, the stream is closed before the error propagates.

        Returns:
            Number of nodes f was called on
        """
        count = 0
        try:
            for node in self:
                f(node)
                count += 1
        except BaseException:
            self.close()
            raise
        return count

    def __repr__(self) -> str:
        if self._drained:
            state = "drained"
        elif self._closed:
            state = "closed"
        else:
            state = "producing"
        return f"NodeStream({self._label}, {state})"


def _filter_items(upstream: NodeStream,
                  predicate: Callable[[Node], bool],
                  policy: ErrorPolicy,
                  cancel: threading.Event) -> Iterator[Node]:
    try:
        for node in upstream:
            if cancel.is_set():
                return
            try:
                keep = predicate(node)
            except Exception as e:
                policy.handle(e, 'filter', node)
                continue
            if keep:
                yield node
    finally:
        upstream.close()


def _map_items(upstream: NodeStream,
               transform: Callable[[Node], Node],
               policy: ErrorPolicy,
               cancel: threading.Event) -> Iterator[Node]:
    try:
        for node in upstream:
            if cancel.is_set():
                return
            try:
                mapped = transform(node)
            except Exception as e:
                policy.handle(e, 'map', node)
                continue
            yield mapped
    finally:
        upstream.close()


def _limit_items(upstream: NodeStream, n: int, label: str,
                 cancel: threading.Event) -> Iterator[Node]:
    try:
        if n == 0:
            return
        count = 0
        for node in upstream:
            if cancel.is_set():
                return
            count += 1
            if count == n:
                logger.debug("%s: limit of %d reached", label, n)
                upstream.close()
                yield node
                return
            yield node
    finally:
        upstream.close()

"""Asyncio-backed node streams.

AsyncNodeStream mirrors the synchronous NodeStream: one producer task per
stream writes into a bounded ``asyncio.Queue``, stages chain by reading the
previous stream, and ``aclose()`` stops the whole pipeline. Streams must be
created while an event loop is running.

Example:
    async with descendants(doc).filter(is_tag("a")).limit(10) as links:
        async for link in links:
            print(link.attr_or_default("href", ""))
"""

import asyncio
import itertools
import logging
import threading
from typing import AsyncIterator, Callable, List, Optional

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


async def _produce(items: AsyncIterator[Node],
                   out: asyncio.Queue,
                   cancel: threading.Event,
                   label: str) -> None:
    """Task body: move items into the buffer until exhausted or cancelled."""
    try:
        async for item in items:
            if cancel.is_set():
                logger.debug("%s: cancelled, producer stopping", label)
                return
            await out.put(item)
        if not cancel.is_set():
            await out.put(_END)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.debug("%s: producer failed", label, exc_info=True)
        if not cancel.is_set():
            await out.put(_Failure(e))
    finally:
        await items.aclose()


class AsyncNodeStream:
    """Single-use, bounded-buffer async stream of nodes.

    Args:
        source: Callable receiving the stream's cancel flag and returning the
                async iterator the producer task drains
        config: Stream configuration shared by every derived stage
        upstream: Stream this one reads from, closed along with this one
        name: Short label used in task names and log records
    """

    def __init__(self,
                 source: Callable[[threading.Event], AsyncIterator[Node]],
                 config: StreamConfig,
                 upstream: Optional['AsyncNodeStream'] = None,
                 name: str = "stream"):
        self._config = config
        self._upstream = upstream
        self._name = name
        self._label = f"{name}#{next(_ids)}"

        self._queue: asyncio.Queue = asyncio.Queue(maxsize=config.buffer_size)
        self._cancel = threading.Event()
        self._closed = False
        self._drained = False
        self._has_reader = False

        loop = asyncio.get_running_loop()
        self._task = loop.create_task(
            _produce(source(self._cancel), self._queue, self._cancel, self._label),
            name=f"{config.thread_name_prefix}-{self._label}",
        )
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

    async def aclose(self) -> None:
        """Stop reading from this stream.

        Sets the cancel flag, cancels and awaits the producer task, then
        closes the stream this one was derived from. Idempotent.
        """
        if self._closed:
            return
        self._closed = True
        self._cancel.set()

        # Wake a reader that is parked on an empty buffer.
        try:
            self._queue.put_nowait(_END)
        except asyncio.QueueFull:
            pass

        if self._task is not asyncio.current_task():
            self._task.cancel()
            await asyncio.wait({self._task})
        logger.debug("%s: closed", self._label)

        if self._upstream is not None:
            await self._upstream.aclose()

    async def wait_closed(self) -> None:
        """Wait until the producer tasks of this stream and its upstream stages end."""
        tasks = set()
        stream: Optional[AsyncNodeStream] = self
        while stream is not None:
            tasks.add(stream._task)
            stream = stream._upstream
        await asyncio.wait(tasks)

    def tasks_done(self) -> bool:
        """True if every producer task in the pipeline has finished."""
        stream: Optional[AsyncNodeStream] = self
        while stream is not None:
            if not stream._task.done():
                return False
            stream = stream._upstream
        return True

    def _mark_drained(self) -> None:
        self._drained = True
        self._closed = True
        logger.debug("%s: drained", self._label)

    # Iteration

    def __aiter__(self) -> 'AsyncNodeStream':
        return self

    async def __anext__(self) -> Node:
        if self._closed:
            raise StopAsyncIteration
        self._has_reader = True

        item = await self._queue.get()
        if self._closed:
            raise StopAsyncIteration
        if item is _END:
            self._mark_drained()
            raise StopAsyncIteration
        if isinstance(item, _Failure):
            self._mark_drained()
            raise item.error
        return item

    async def __aenter__(self) -> 'AsyncNodeStream':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # Stages

    def filter(self, predicate: Callable[[Node], bool]) -> 'AsyncNodeStream':
        """Return a stream of the nodes for which predicate is true."""
        policy = self._config.policy()
        return self._derive('filter', lambda cancel: _filter_items(self, predicate, policy, cancel))

    def map(self, transform: Callable[[Node], Node]) -> 'AsyncNodeStream':
        """Return a stream of transform(node) for every node, in order."""
        policy = self._config.policy()
        return self._derive('map', lambda cancel: _map_items(self, transform, policy, cancel))

    def limit(self, n: int) -> 'AsyncNodeStream':
        """Return a stream of exactly the first n nodes, closing this one after.

        Raises:
            InvalidArgumentError: If n is negative
        """
        if n < 0:
            raise InvalidArgumentError(f"limit must not be negative, got {n}")
        return self._derive('limit', lambda cancel: _limit_items(self, n, cancel))

    def _derive(self, stage: str,
                source: Callable[[threading.Event], AsyncIterator[Node]]) -> 'AsyncNodeStream':
        if self._has_reader:
            raise StreamStateError(
                f"{self._label} already has a reader; streams are single-use"
            )
        self._has_reader = True
        return AsyncNodeStream(source, self._config, upstream=self, name=stage)

    # Terminal consumers

    async def first(self) -> Optional[Node]:
        """Return the first node and close the stream, or None if it is empty."""
        try:
            node = await self.__anext__()
        except StopAsyncIteration:
            return None
        await self.aclose()
        return node

    async def all(self) -> List[Node]:
        """Drain the stream into a list, in delivery order."""
        return [node async for node in self]

    async def apply(self, f: Callable[[Node], object]) -> int:
        """Call f on each node in order; f may be a coroutine function.

        If f raises, the stream is closed before the error propagates.

        Returns:
            Number of nodes f was called on
        """
        count = 0
        try:
            async for node in self:
                result = f(node)
                if asyncio.iscoroutine(result):
                    await result
                count += 1
        except BaseException:
            await self.aclose()
            raise
        return count

    def __repr__(self) -> str:
        if self._drained:
            state = "drained"
        elif self._closed:
            state = "closed"
        else:
            state = "producing"
        return f"AsyncNodeStream({self._label}, {state})"


async def _filter_items(upstream: AsyncNodeStream,
                        predicate: Callable[[Node], bool],
                        policy: ErrorPolicy,
                        cancel: threading.Event) -> AsyncIterator[Node]:
    try:
        async for node in upstream:
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
        await upstream.aclose()


async def _map_items(upstream: AsyncNodeStream,
                     transform: Callable[[Node], Node],
                     policy: ErrorPolicy,
                     cancel: threading.Event) -> AsyncIterator[Node]:
    try:
        async for node in upstream:
            if cancel.is_set():
                return
            try:
                mapped = transform(node)
            except Exception as e:
                policy.handle(e, 'map', node)
                continue
            yield mapped
    finally:
        await upstream.aclose()


async def _limit_items(upstream: AsyncNodeStream, n: int,
                       cancel: threading.Event) -> AsyncIterator[Node]:
    try:
        if n == 0:
            return
        count = 0
        async for node in upstream:
            if cancel.is_set():
                return
            count += 1
            if count == n:
                logger.debug("%s: limit of %d reached", upstream._label, n)
                await upstream.aclose()
                yield node
                return
            yield node
    finally:
        await upstream.aclose()

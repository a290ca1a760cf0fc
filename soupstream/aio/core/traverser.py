"""Document-order traversal bound to an asyncio task.

The sequential walk is the same one the synchronous streams use; here it
is driven by the stream's producer task, which suspends whenever the
bounded buffer is full.
"""

import threading
from typing import AsyncIterator, Callable, Optional

from ..._common.config import StreamConfig, resolve_config
from ..._common.errors import InvalidArgumentError
from ..._common.node import Node
from ..._common.predicates import trim_text
from ..._common.walk import walk
from .stream import AsyncNodeStream


async def _walk_async(root: Node,
                      recursive: bool,
                      cancel: threading.Event,
                      transform: Optional[Callable[[Node], Node]]) -> AsyncIterator[Node]:
    for node in walk(root, recursive, cancel, transform):
        yield node


class AsyncDocumentOrderTraverser:
    """Async pre-order traversal strategy producing AsyncNodeStreams."""

    def __init__(self, recursive: bool = True, config: Optional[StreamConfig] = None):
        """Initialize traverser.

        Args:
            recursive: Walk all descendants (True) or direct children only
            config: Stream configuration (defaults to StreamConfig())

        Raises:
            InvalidArgumentError: If config is invalid
        """
        self.recursive = recursive
        self.config = resolve_config(config)

    def traverse(self, root: Node) -> AsyncNodeStream:
        """Start a stream over the nodes below root.

        Must be called while an event loop is running.

        Raises:
            InvalidArgumentError: If root is None
        """
        if root is None:
            raise InvalidArgumentError("traverse: root node is None")

        recursive = self.recursive
        transform = trim_text if self.config.trim_text else None
        return AsyncNodeStream(
            lambda cancel: _walk_async(root, recursive, cancel, transform),
            self.config,
            name='descendants' if recursive else 'children',
        )


def tree_stream(root: Node,
                recursive: bool = True,
                config: Optional[StreamConfig] = None) -> AsyncNodeStream:
    """Stream the descendants of root in document order (async).

    If recursive is False, only direct children are considered.
    """
    return AsyncDocumentOrderTraverser(recursive, config).traverse(root)

"""Document-order traversal bound to a background worker.

The traverser turns the sequential walk into a NodeStream: the walk runs on
the stream's single worker thread and checks the stream's cancel flag
between node visits.
"""

from typing import Optional

from ..._common.config import StreamConfig, resolve_config
from ..._common.errors import InvalidArgumentError
from ..._common.node import Node
from ..._common.predicates import trim_text
from ..._common.walk import walk
from .stream import NodeStream


class DocumentOrderTraverser:
    """Pre-order traversal strategy producing NodeStreams.

    Visits each node before its children and children before the following
    siblings, left to right. With ``recursive=False`` only the direct
    children of the root are produced.
    """

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

    def traverse(self, root: Node) -> NodeStream:
        """Start a stream over the nodes below root.

        Raises:
            InvalidArgumentError: If root is None
        """
        if root is None:
            raise InvalidArgumentError("traverse: root node is None")

        recursive = self.recursive
        transform = trim_text if self.config.trim_text else None
        return NodeStream(
            lambda cancel: walk(root, recursive, cancel, transform),
            self.config,
            name='descendants' if recursive else 'children',
        )


def tree_stream(root: Node,
                recursive: bool = True,
                config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the descendants of root in document order.

    If recursive is False, only direct children are considered.
    """
    return DocumentOrderTraverser(recursive, config).traverse(root)

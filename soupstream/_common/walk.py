"""Sequential document-order walk over a node tree.

This is the traversal engine shared by the sync and aio streams. It is a
plain generator with no I/O and no threads: the streams run it on their
single background worker and hand it the stream's cancel flag.
"""

import threading
from typing import Callable, Iterator, List, Optional

from .errors import InvalidArgumentError
from .node import Node


def walk(root: Node,
         recursive: bool = True,
         cancel: Optional[threading.Event] = None,
         transform: Optional[Callable[[Node], Node]] = None) -> Iterator[Node]:
    """Walk the nodes below root in document pre-order.

    Each node is produced before its children, and children before the
    node's following siblings. The root itself is not produced. The order
    depends only on the shape of the tree.

    The tree must be acyclic; a cycle makes the walk non-terminating.

    Args:
        root: Node whose descendants are walked
        recursive: If False, only the direct children of root are produced
        cancel: Flag checked before each node is produced; once it is set
                the walk stops without visiting anything further
        transform: Pure function applied to each node as it is produced.
                   Navigation always continues from the original node.

    Returns:
        Generator of nodes

    Raises:
        InvalidArgumentError: If root is None (raised immediately, not on
                              first iteration)
    """
    if root is None:
        raise InvalidArgumentError("walk: root node is None")
    return _walk(root, recursive, cancel, transform)


def _walk(root: Node,
          recursive: bool,
          cancel: Optional[threading.Event],
          transform: Optional[Callable[[Node], Node]]) -> Iterator[Node]:
    # Explicit stack of the siblings to resume at, so deep trees do not
    # run into the interpreter's recursion limit.
    pending: List[Optional[Node]] = []
    node = root.first_child

    while node is not None:
        if cancel is not None and cancel.is_set():
            return

        yield transform(node) if transform is not None else node

        if recursive and node.first_child is not None:
            pending.append(node.next_sibling)
            node = node.first_child
            continue

        node = node.next_sibling
        while node is None and pending:
            node = pending.pop()

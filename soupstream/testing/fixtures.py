"""Test fixtures for soupstream consumers.

Builders for small hand-written trees, for pathological shapes (very deep,
very wide, unbounded), and an assertion that a stream's background work
has ended.
"""

import weakref
from typing import Dict, Optional, Union

from .._common.node import Attribute, Node, NodeType

TreeSpec = Union[str, tuple]


def _build(spec: TreeSpec) -> Node:
    if isinstance(spec, str):
        return Node(NodeType.TEXT, spec)

    tag, *rest = spec
    attrs: Dict[str, str] = {}
    if rest and isinstance(rest[0], dict):
        attrs = rest[0]
        rest = rest[1:]
    element = Node(NodeType.ELEMENT, tag,
                   [Attribute(key, val) for key, val in attrs.items()])
    for child_spec in rest:
        element.append_child(_build(child_spec))
    return element


def build_tree(*specs: TreeSpec) -> Node:
    """Build a document from nested tuples.

    A string is a text node. A tuple is ``(tag, [attrs dict], *children)``.

    Example:
        doc = build_tree(
            ("html",
                ("head", ("title", "T")),
                ("body", ("p", {"class": "intro"}, "hi"))),
        )

    Returns:
        DOCUMENT node whose children are the built specs
    """
    document = Node(NodeType.DOCUMENT)
    for spec in specs:
        document.append_child(_build(spec))
    return document


def chain_tree(depth: int, tag: str = "div") -> Node:
    """Build a document that is a single chain of ``depth`` nested elements."""
    document = Node(NodeType.DOCUMENT)
    parent = document
    for _ in range(depth):
        parent = parent.append_child(Node(NodeType.ELEMENT, tag))
    return document


def wide_tree(width: int, tag: str = "p") -> Node:
    """Build a document with ``width`` sibling elements under it."""
    document = Node(NodeType.DOCUMENT)
    for i in range(width):
        document.append_child(
            Node(NodeType.ELEMENT, tag, [Attribute("id", str(i))])
        )
    return document


class _EndlessSibling(Node):
    """Element whose next sibling is created the first time it is asked for."""

    def __init__(self, owner: 'EndlessTree', parent: Node, index: int):
        super().__init__(NodeType.ELEMENT, owner.tag, [Attribute("id", str(index))])
        self._owner = owner
        self._index = index
        self._parent = weakref.ref(parent)
        owner.created += 1

    @property
    def next_sibling(self) -> Optional[Node]:
        if self._next_sibling is None:
            sibling = _EndlessSibling(self._owner, self.parent, self._index + 1)
            sibling._prev_sibling = weakref.ref(self)
            self._next_sibling = sibling
        return self._next_sibling


class EndlessTree:
    """A document with an unbounded run of child elements.

    Children are materialized on demand, so ``created`` tells how far a
    traversal actually got.
    """

    def __init__(self, tag: str = "item"):
        self.tag = tag
        self.created = 0
        self.document = Node(NodeType.DOCUMENT)
        first = _EndlessSibling(self, self.document, 0)
        self.document._first_child = first
        self.document._last_child = first


def assert_released(stream, timeout: float = 2.0) -> None:
    """Assert that a sync stream is closed and all of its workers have ended.

    Raises:
        AssertionError: If the stream is still open or a worker is alive
                        after timeout seconds
    """
    assert stream.closed, f"{stream!r} is not closed"
    assert stream.join(timeout), f"{stream!r} still has live workers after {timeout}s"

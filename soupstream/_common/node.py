"""Node tree for soupstream.

A Node is one unit of a parsed document: the document root, an element, a
text run, a comment or a doctype. Nodes are linked the way a DOM is linked:
each node owns its first child and its next sibling, and points back to its
parent and previous sibling through weak references.

Trees are built once (by ``soupstream.parsing.wrap_tree`` or by hand through
``append_child``) and are then treated as read-only by every traversal.
"""

import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from .errors import AttributeNotFoundError


class NodeType(Enum):
    """Kind of a node in the parsed tree."""
    ERROR = "error"
    TEXT = "text"
    DOCUMENT = "document"
    ELEMENT = "element"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass(frozen=True)
class Attribute:
    """One attribute of an element, in source order."""
    key: str
    val: str
    namespace: str = ""


def _deref(ref: Optional[weakref.ref]) -> Optional["Node"]:
    return ref() if ref is not None else None


class Node:
    """A single node in a parsed document tree.

    Attributes:
        type: The NodeType of this node
        data: Tag name for elements, raw text for text/comment nodes,
              doctype name for doctypes
        attrs: Ordered tuple of Attribute; keys are not required to be unique
        namespace: Element namespace ("" for HTML, "svg", "math")
    """

    def __init__(self,
                 type: NodeType,
                 data: str = "",
                 attrs: Iterable[Attribute] = (),
                 namespace: str = ""):
        self.type = type
        self.data = data
        self.attrs = tuple(attrs)
        self.namespace = namespace

        self._parent: Optional[weakref.ref] = None
        self._prev_sibling: Optional[weakref.ref] = None
        self._first_child: Optional[Node] = None
        self._last_child: Optional[Node] = None
        self._next_sibling: Optional[Node] = None

    # Links

    @property
    def parent(self) -> Optional["Node"]:
        return _deref(self._parent)

    @property
    def prev_sibling(self) -> Optional["Node"]:
        return _deref(self._prev_sibling)

    @property
    def first_child(self) -> Optional["Node"]:
        return self._first_child

    @property
    def last_child(self) -> Optional["Node"]:
        return self._last_child

    @property
    def next_sibling(self) -> Optional["Node"]:
        return self._next_sibling

    def append_child(self, child: "Node") -> "Node":
        """Link a detached node as the new last child of this node.

        This is a tree-building operation. It must not be called while a
        stream over this tree is live.

        Args:
            child: Node without a parent and without siblings

        Returns:
            The appended child, to allow chained building

        Raises:
            ValueError: If child is already attached, or if linking it would
                        create a cycle
        """
        if child.parent is not None or child.prev_sibling is not None \
                or child.next_sibling is not None:
            raise ValueError(f"{child!r} is already attached to a tree")

        ancestor: Optional[Node] = self
        while ancestor is not None:
            if ancestor is child:
                raise ValueError(
                    f"appending {child!r} to {self!r} would create a cycle"
                )
            ancestor = ancestor.parent

        child._parent = weakref.ref(self)
        if self._last_child is None:
            self._first_child = child
        else:
            child._prev_sibling = weakref.ref(self._last_child)
            self._last_child._next_sibling = child
        self._last_child = child
        return child

    def iter_children(self) -> Iterator["Node"]:
        """Iterate over the direct children in order, without a background worker."""
        child = self.first_child
        while child is not None:
            yield child
            child = child.next_sibling

    def root(self) -> "Node":
        """Return the root of the tree containing this node."""
        node = self
        parent = node.parent
        while parent is not None:
            node = parent
            parent = node.parent
        return node

    # Attributes

    def has_attr(self, key: str) -> bool:
        """Check if this node has the specified attribute."""
        return any(a.key == key for a in self.attrs)

    def attr(self, key: str) -> str:
        """Return the value of the first attribute named key.

        Raises:
            AttributeNotFoundError: If this node has no such attribute
        """
        for a in self.attrs:
            if a.key == key:
                return a.val
        raise AttributeNotFoundError(key)

    def attr_or_default(self, key: str, default: str) -> str:
        """Return the value of attribute key, or default if it is absent."""
        for a in self.attrs:
            if a.key == key:
                return a.val
        return default

    def has_attr_containing(self, key: str, match: str) -> bool:
        """Check if attribute key exists and its value contains match."""
        for a in self.attrs:
            if a.key == key:
                return match in a.val
        return False

    def is_tag(self, name: str) -> bool:
        """Check if this node is an element with the given tag name."""
        return self.type is NodeType.ELEMENT and self.data == name

    def __repr__(self) -> str:
        if self.type is NodeType.ELEMENT:
            return f"Node(<{self.data}>)"
        if self.type is NodeType.DOCUMENT:
            return "Node(#document)"
        return f"Node({self.type.value}, {self.data!r})"

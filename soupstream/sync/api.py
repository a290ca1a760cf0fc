"""High-level query API for soupstream.

Every query returns a NodeStream. Read it to the end, or close it (or use
it as a context manager) when stopping early.
"""

from typing import Callable, Optional

from .._common.config import StreamConfig
from .._common.node import Node
from .._common.predicates import has_attr_containing, is_tag
from .core.stream import NodeStream
from .core.traverser import tree_stream


def children(root: Node, config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the direct children of root, left to right.

    Padded text nodes are delivered as trimmed copies unless the config
    is ``StreamConfig.raw()``; see ``descendants``.

    Args:
        root: Parent node
        config: Optional stream configuration

    Returns:
        NodeStream of the children

    Raises:
        InvalidArgumentError: If root is None or config is invalid
    """
    return tree_stream(root, recursive=False, config=config)


def descendants(root: Node, config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream every node below root in document pre-order.

    With the default config, a text node whose payload has surrounding
    whitespace is delivered as a trimmed shallow copy; every other node is
    the tree's own object. Pass ``StreamConfig.raw()`` to keep identity.

    Example:
        >>> doc = parse("<p>hi</p>")
        >>> [n.data for n in descendants(doc)]
        ['html', 'head', 'body', 'p', 'hi']
    """
    return tree_stream(root, recursive=True, config=config)


def children_matching(root: Node,
                      predicate: Callable[[Node], bool],
                      config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the direct children of root for which predicate is true."""
    return children(root, config).filter(predicate)


def descendants_matching(root: Node,
                         predicate: Callable[[Node], bool],
                         config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the descendants of root for which predicate is true."""
    return descendants(root, config).filter(predicate)


def children_by_tag(root: Node, name: str,
                    config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the direct children of root that are <name> elements."""
    return children_matching(root, is_tag(name), config)


def descendants_by_tag(root: Node, name: str,
                       config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the descendants of root that are <name> elements.

    Example:
        >>> head = descendants_by_tag(doc, "head").first()
    """
    return descendants_matching(root, is_tag(name), config)


def children_by_attr_containing(root: Node, key: str, match: str,
                                config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the direct children of root whose attribute key contains match."""
    return children_matching(root, has_attr_containing(key, match), config)


def descendants_by_attr_containing(root: Node, key: str, match: str,
                                   config: Optional[StreamConfig] = None) -> NodeStream:
    """Stream the descendants of root whose attribute key contains match."""
    return descendants_matching(root, has_attr_containing(key, match), config)

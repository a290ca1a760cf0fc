"""Predicate and transform factories for node streams.

Predicates are plain callables ``Node -> bool`` and transforms are plain
callables ``Node -> Node``. They are passed explicitly into stream stages
and query functions; nothing here holds state.
"""

import copy
from typing import Callable

from .node import Node, NodeType

Predicate = Callable[[Node], bool]
Transform = Callable[[Node], Node]


def is_tag(name: str) -> Predicate:
    """Match elements with the given tag name."""
    def predicate(node: Node) -> bool:
        return node.is_tag(name)
    return predicate


def has_attr_containing(key: str, match: str) -> Predicate:
    """Match nodes whose attribute ``key`` contains ``match``."""
    def predicate(node: Node) -> bool:
        return node.has_attr_containing(key, match)
    return predicate


def is_type(node_type: NodeType) -> Predicate:
    """Match nodes of a single NodeType."""
    def predicate(node: Node) -> bool:
        return node.type is node_type
    return predicate


def is_non_blank(node: Node) -> bool:
    """False for text nodes made only of whitespace, True for everything else."""
    return node.type is not NodeType.TEXT or bool(node.data.strip())


def all_of(*predicates: Predicate) -> Predicate:
    def predicate(node: Node) -> bool:
        return all(p(node) for p in predicates)
    return predicate


def any_of(*predicates: Predicate) -> Predicate:
    def predicate(node: Node) -> bool:
        return any(p(node) for p in predicates)
    return predicate


def negate(inner: Predicate) -> Predicate:
    def predicate(node: Node) -> bool:
        return not inner(node)
    return predicate


def trim_text(node: Node) -> Node:
    """Return the node with surrounding whitespace removed from text payloads.

    Non-text nodes and already-trimmed text nodes are returned as-is.
    Otherwise a shallow copy is returned: it shares the original's links,
    so navigation from it works, and the tree itself is left untouched.
    Applying this twice gives the same payload as applying it once.
    """
    if node.type is not NodeType.TEXT:
        return node
    trimmed = node.data.strip()
    if trimmed == node.data:
        return node
    normalized = copy.copy(node)
    normalized.data = trimmed
    return normalized

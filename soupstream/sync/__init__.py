"""Synchronous implementation of soupstream.

Streams here are backed by one background worker thread each and are read
with plain ``for`` loops.
"""

# Core components
from .core.stream import NodeStream
from .core.traverser import DocumentOrderTraverser, tree_stream

# High-level API
from .api import (
    children,
    descendants,
    children_matching,
    descendants_matching,
    children_by_tag,
    descendants_by_tag,
    children_by_attr_containing,
    descendants_by_attr_containing,
)

# Shared components
from .._common import (
    Node,
    NodeType,
    Attribute,
    StreamConfig,
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)

__all__ = [
    # Core
    'NodeStream',
    'DocumentOrderTraverser',
    'tree_stream',
    # API
    'children',
    'descendants',
    'children_matching',
    'descendants_matching',
    'children_by_tag',
    'descendants_by_tag',
    'children_by_attr_containing',
    'descendants_by_attr_containing',
    # Shared
    'Node',
    'NodeType',
    'Attribute',
    'StreamConfig',
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
]

"""Asynchronous implementation of soupstream.

Streams here are backed by one asyncio task each and are read with
``async for``. Queries must be made while an event loop is running.
"""

# Core components
from .core.stream import AsyncNodeStream
from .core.traverser import AsyncDocumentOrderTraverser, tree_stream

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
    'AsyncNodeStream',
    'AsyncDocumentOrderTraverser',
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

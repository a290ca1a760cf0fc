"""Core components of the synchronous implementation."""

from .stream import NodeStream
from .traverser import DocumentOrderTraverser, tree_stream

__all__ = [
    'NodeStream',
    'DocumentOrderTraverser',
    'tree_stream',
]

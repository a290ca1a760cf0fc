"""Core components of the asyncio implementation."""

from .stream import AsyncNodeStream
from .traverser import AsyncDocumentOrderTraverser, tree_stream

__all__ = [
    'AsyncNodeStream',
    'AsyncDocumentOrderTraverser',
    'tree_stream',
]

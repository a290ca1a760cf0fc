"""soupstream - lazy, cancelable traversal of parsed HTML trees.

soupstream parses markup into a linked node tree and exposes "children" and
"descendants" queries as on-demand node streams: filtered, mapped and
limited in pipelines, and closable at any point without leaving background
work behind.

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from soupstream.sync import descendants_by_tag

Asynchronous:
    from soupstream.aio import descendants_by_tag
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both implementations walk the tree in the same document order and share
the same node model, configuration and error policies.
"""

__version__ = "0.3.0"

from . import sync
from . import aio
from ._common import (
    Node,
    NodeType,
    Attribute,
    StreamConfig,
    SoupStreamError,
    InvalidArgumentError,
    AttributeNotFoundError,
    MetadataNotFoundError,
    StreamStateError,
    is_tag,
    has_attr_containing,
    is_type,
    is_non_blank,
    all_of,
    any_of,
    negate,
    trim_text,
)
from .parsing import parse, parse_fragment, wrap_tree
from .metadata import get_doc_charset, get_doc_content_type

__all__ = [
    "__version__",
    "sync",
    "aio",
    "Node",
    "NodeType",
    "Attribute",
    "StreamConfig",
    "SoupStreamError",
    "InvalidArgumentError",
    "AttributeNotFoundError",
    "MetadataNotFoundError",
    "StreamStateError",
    "is_tag",
    "has_attr_containing",
    "is_type",
    "is_non_blank",
    "all_of",
    "any_of",
    "negate",
    "trim_text",
    "parse",
    "parse_fragment",
    "wrap_tree",
    "get_doc_charset",
    "get_doc_content_type",
]

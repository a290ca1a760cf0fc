"""Common components shared between sync and aio implementations.

This internal package contains non-I/O code that is identical between
both implementations. It should NOT be imported directly by users.

Components here include:
- The node tree (Node, NodeType, Attribute)
- The sequential document-order walk
- Configuration, errors, error policies, predicates

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .config import NODE_BUFFER_SIZE, StreamConfig, resolve_config
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    ThresholdPolicy,
)
from .errors import (
    SoupStreamError,
    InvalidArgumentError,
    AttributeNotFoundError,
    MetadataNotFoundError,
    StreamStateError,
)
from .node import Attribute, Node, NodeType
from .predicates import (
    is_tag,
    has_attr_containing,
    is_type,
    is_non_blank,
    all_of,
    any_of,
    negate,
    trim_text,
)
from .walk import walk

__all__ = [
    'NODE_BUFFER_SIZE',
    'StreamConfig',
    'resolve_config',
    'ErrorPolicy',
    'FailFastPolicy',
    'ContinueOnErrorsPolicy',
    'CollectErrorsPolicy',
    'ThresholdPolicy',
    'SoupStreamError',
    'InvalidArgumentError',
    'AttributeNotFoundError',
    'MetadataNotFoundError',
    'StreamStateError',
    'Attribute',
    'Node',
    'NodeType',
    'is_tag',
    'has_attr_containing',
    'is_type',
    'is_non_blank',
    'all_of',
    'any_of',
    'negate',
    'trim_text',
    'walk',
]

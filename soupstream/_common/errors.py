"""Exception hierarchy for soupstream.

Precondition violations (``InvalidArgumentError``) abort the call that made
them. Lookup failures (``AttributeNotFoundError``, ``MetadataNotFoundError``)
are ordinary results the caller is expected to handle.
"""


class SoupStreamError(Exception):
    """Base class for every error raised by soupstream."""
    pass


class InvalidArgumentError(SoupStreamError, ValueError):
    """Raised when a query is made with an argument it cannot accept.

    Examples: a ``None`` root node, a negative limit, or an invalid
    ``StreamConfig``.
    """
    pass


class AttributeNotFoundError(SoupStreamError, KeyError):
    """Raised by strict attribute lookup when the attribute is absent."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no such attribute '{self.key}'"


class MetadataNotFoundError(SoupStreamError, LookupError):
    """Raised when document metadata (content type, charset) cannot be located."""
    pass


class StreamStateError(SoupStreamError, RuntimeError):
    """Raised when a single-use stream is given a second reader."""
    pass

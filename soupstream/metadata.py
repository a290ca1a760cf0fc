"""Document metadata extraction built on the query API.

Locates the character encoding a document declares in its ``<head>``,
either through ``<meta http-equiv="Content-Type" content="...; charset=...">``
or through the HTML5 ``<meta charset="...">`` form.
"""

import logging

from ._common.errors import MetadataNotFoundError
from ._common.node import Node
from .sync.api import descendants_by_attr_containing, descendants_by_tag

logger = logging.getLogger(__name__)

CHARSET_MARKER = "charset="


def _find_head(node: Node) -> Node:
    head = descendants_by_tag(node.root(), "head").first()
    if head is None:
        raise MetadataNotFoundError("document head not found")
    return head


def get_doc_content_type(node: Node) -> str:
    """Return the content attribute of the document's charset-bearing meta tag.

    Args:
        node: Any node of the document

    Returns:
        The full content value, e.g. "text/html; charset=utf-8"

    Raises:
        MetadataNotFoundError: If the document has no head, or no head
                               descendant with a charset in its content
    """
    head = _find_head(node)
    meta = descendants_by_attr_containing(head, "content", CHARSET_MARKER).first()
    if meta is None:
        raise MetadataNotFoundError("get_doc_content_type: meta not found")
    return meta.attr("content")


def parse_charset(content: str) -> str:
    """Extract the charset name from a content-type string.

    Everything after "charset=" up to the first ';', then up to the first
    space.

        >>> parse_charset("text/html; charset=ISO-8859-1")
        'ISO-8859-1'

    Raises:
        MetadataNotFoundError: If content has no "charset=" marker
    """
    if CHARSET_MARKER not in content:
        raise MetadataNotFoundError(f"parse_charset: no {CHARSET_MARKER!r} in {content!r}")
    charset = content.split(CHARSET_MARKER, 1)[1]
    charset = charset.split(";", 1)[0]
    return charset.split(" ", 1)[0]


def get_doc_charset(node: Node) -> str:
    """Return the character encoding declared by the document.

    The http-equiv form is tried first; when it is absent the first head
    descendant carrying a ``charset`` attribute is used.

    Raises:
        MetadataNotFoundError: If no charset declaration exists
    """
    try:
        return parse_charset(get_doc_content_type(node))
    except MetadataNotFoundError:
        head = _find_head(node)

    meta = descendants_by_attr_containing(head, "charset", "").first()
    if meta is None:
        raise MetadataNotFoundError("get_doc_charset: no charset declaration found")
    logger.debug("Using <meta charset> declaration on %r", meta)
    return meta.attr("charset").strip()

"""Parse markup into a soupstream node tree.

Parsing itself is delegated to html5lib, which builds a W3C DOM. The DOM is
then wrapped into an equivalent tree of ``Node`` objects; after that the
html5lib tree is no longer referenced.
"""

import logging
from typing import IO, Optional, Union
from xml.dom import Node as DomNode

import html5lib
from html5lib.constants import namespaces

from ._common.node import Attribute, Node, NodeType

logger = logging.getLogger(__name__)

# html5lib namespace URI -> short namespace name used on Node / Attribute
_NAMESPACE_NAMES = {uri: prefix for prefix, uri in namespaces.items()}
_NAMESPACE_NAMES[namespaces["html"]] = ""
_NAMESPACE_NAMES[namespaces["mathml"]] = "math"

_NODE_TYPES = {
    DomNode.DOCUMENT_NODE: NodeType.DOCUMENT,
    DomNode.DOCUMENT_FRAGMENT_NODE: NodeType.DOCUMENT,
    DomNode.ELEMENT_NODE: NodeType.ELEMENT,
    DomNode.TEXT_NODE: NodeType.TEXT,
    DomNode.CDATA_SECTION_NODE: NodeType.TEXT,
    DomNode.COMMENT_NODE: NodeType.COMMENT,
    DomNode.DOCUMENT_TYPE_NODE: NodeType.DOCTYPE,
}

Source = Union[str, bytes, IO]


def _namespace_name(uri: Optional[str]) -> str:
    if not uri:
        return ""
    return _NAMESPACE_NAMES.get(uri, uri)


def _wrap_attributes(dom_node) -> list:
    attrs = []
    dom_attrs = dom_node.attributes
    for i in range(dom_attrs.length):
        a = dom_attrs.item(i)
        if a.namespaceURI:
            attrs.append(Attribute(a.localName, a.value, _namespace_name(a.namespaceURI)))
        else:
            attrs.append(Attribute(a.name, a.value))
    return attrs


def _wrap_one(dom_node) -> Node:
    """Copy one DOM node's own data into a detached Node."""
    node_type = _NODE_TYPES.get(dom_node.nodeType, NodeType.ERROR)

    if node_type is NodeType.ELEMENT:
        return Node(node_type, dom_node.tagName,
                    _wrap_attributes(dom_node),
                    _namespace_name(dom_node.namespaceURI))
    if node_type in (NodeType.TEXT, NodeType.COMMENT):
        return Node(node_type, dom_node.data)
    if node_type is NodeType.DOCTYPE:
        return Node(node_type, dom_node.name or "")
    if node_type is NodeType.ERROR:
        logger.debug("Unexpected DOM node type %s wrapped as ERROR", dom_node.nodeType)
    return Node(node_type)


def wrap_tree(dom_node) -> Optional[Node]:
    """Convert a DOM node and all its descendants into an equivalent Node tree.

    The returned node has no parent and no siblings; its children and all
    their descendants are fully linked.

    Args:
        dom_node: xml.dom node (Document, DocumentFragment or Element), or None

    Returns:
        Root of the new tree, or None if dom_node is None
    """
    if dom_node is None:
        return None

    root = _wrap_one(dom_node)
    pending = [(dom_node, root)]
    while pending:
        source, target = pending.pop()
        for dom_child in source.childNodes:
            child = target.append_child(_wrap_one(dom_child))
            if dom_child.hasChildNodes():
                pending.append((dom_child, child))
    return root


def parse(source: Source, **kwargs) -> Node:
    """Parse an HTML document and return its DOCUMENT node.

    Args:
        source: Markup as str, bytes (encoding is sniffed) or a file-like object
        **kwargs: Passed to html5lib's parser (e.g. ``transport_encoding``)

    Returns:
        The document root of the wrapped tree
    """
    dom = html5lib.parse(source, treebuilder="dom", namespaceHTMLElements=False, **kwargs)
    return wrap_tree(dom)


def parse_fragment(source: Source, container: str = "div", **kwargs) -> Node:
    """Parse an HTML fragment as if it were the content of ``container``.

    Returns:
        A DOCUMENT-type node whose children are the fragment's top-level nodes
    """
    fragment = html5lib.parseFragment(source, container=container, treebuilder="dom",
                                      namespaceHTMLElements=False, **kwargs)
    return wrap_tree(fragment)

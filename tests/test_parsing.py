"""Tests for parsing markup into node trees."""

import unittest
import xml.dom.minidom

from soupstream import NodeType, parse, parse_fragment, wrap_tree
from soupstream.sync import children, descendants, descendants_by_tag


class TestParse(unittest.TestCase):
    """Test parse() on whole documents."""

    def test_canonical_document(self):
        doc = parse("<html><head><title>T</title></head><body><p>hi</p></body></html>")
        self.assertIs(doc.type, NodeType.DOCUMENT)
        self.assertIsNone(doc.parent)
        self.assertEqual([n.data for n in descendants(doc)],
                         ["html", "head", "title", "T", "body", "p", "hi"])

    def test_implied_elements_are_created(self):
        doc = parse("<p>hi")
        self.assertEqual([n.data for n in descendants(doc)],
                         ["html", "head", "body", "p", "hi"])

    def test_attributes_keep_source_order(self):
        doc = parse('<a href="/x" class="y" id="z">t</a>')
        a = descendants_by_tag(doc, "a").first()
        self.assertEqual([attr.key for attr in a.attrs], ["href", "class", "id"])
        self.assertEqual(a.attr("class"), "y")
        self.assertEqual(a.namespace, "")

    def test_links_are_consistent(self):
        doc = parse("<ul><li>1</li><li>2</li><li>3</li></ul>")
        ul = descendants_by_tag(doc, "ul").first()
        items = children(ul).all()
        self.assertEqual(len(items), 3)
        self.assertIs(ul.first_child, items[0])
        self.assertIs(ul.last_child, items[2])
        self.assertIs(items[1].prev_sibling, items[0])
        self.assertIs(items[1].next_sibling, items[2])
        self.assertTrue(all(item.parent is ul for item in items))
        self.assertIs(items[2].root(), doc)

    def test_doctype_and_comments(self):
        doc = parse("<!DOCTYPE html><p>a<!--note-->b</p>")
        self.assertIs(doc.first_child.type, NodeType.DOCTYPE)
        self.assertEqual(doc.first_child.data, "html")
        p = descendants_by_tag(doc, "p").first()
        self.assertEqual([(n.type, n.data) for n in children(p)],
                         [(NodeType.TEXT, "a"), (NodeType.COMMENT, "note"),
                          (NodeType.TEXT, "b")])

    def test_svg_namespace(self):
        doc = parse('<svg><use xlink:href="#a"/></svg>')
        svg = descendants_by_tag(doc, "svg").first()
        self.assertEqual(svg.namespace, "svg")
        use = svg.first_child
        self.assertEqual(use.data, "use")
        self.assertEqual(use.attrs[0].key, "href")
        self.assertEqual(use.attrs[0].namespace, "xlink")

    def test_bytes_input_is_decoded(self):
        doc = parse(b'<meta charset="utf-8"><p>caf\xc3\xa9</p>')
        p = descendants_by_tag(doc, "p").first()
        self.assertEqual(p.first_child.data, "café")


class TestParseFragment(unittest.TestCase):
    """Test parse_fragment()."""

    def test_fragment_top_level_nodes(self):
        root = parse_fragment("<b>x</b> tail")
        self.assertIs(root.type, NodeType.DOCUMENT)
        self.assertEqual([n.data for n in children(root)], ["b", "tail"])
        self.assertEqual([n.data for n in descendants(root)], ["b", "x", "tail"])

    def test_fragment_in_table_context(self):
        root = parse_fragment("<tr><td>1</td></tr>", container="tbody")
        self.assertEqual(root.first_child.data, "tr")


class TestWrapTree(unittest.TestCase):
    """Test wrapping an existing DOM."""

    def test_none(self):
        self.assertIsNone(wrap_tree(None))

    def test_wrap_minidom_element(self):
        dom = xml.dom.minidom.parseString('<root><item k="v">text</item><item/></root>')
        root = wrap_tree(dom.documentElement)
        self.assertEqual(root.data, "root")
        self.assertIsNone(root.parent)
        self.assertIsNone(root.next_sibling)
        self.assertEqual([n.data for n in descendants(root)], ["item", "text", "item"])
        self.assertEqual(root.first_child.attr("k"), "v")


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Basic soupstream usage.

This example demonstrates:
- Parsing a document and reading its declared charset
- Streaming links lazily with a filter pipeline
- Stopping early without leaving background work behind
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from soupstream import MetadataNotFoundError, get_doc_charset, has_attr_containing, parse
from soupstream.sync import descendants_by_tag

SAMPLE = """
<html>
  <head>
    <meta http-equiv="Content-Type" content="text/html; charset=ISO-8859-1">
    <title>Sample</title>
  </head>
  <body>
    <a href="http://example.com/a">a</a>
    <a href="/local">b</a>
    <a href="http://example.com/c">c</a>
  </body>
</html>
"""


def main():
    if len(sys.argv) > 1:
        source = Path(sys.argv[1]).read_bytes()
    else:
        source = SAMPLE

    doc = parse(source)

    print("soupstream - Basic Usage")
    print("=" * 60)

    try:
        print(f"Declared charset: {get_doc_charset(doc)}")
    except MetadataNotFoundError as e:
        print(f"No charset declared ({e})")

    print("\nFirst two external links:")
    external = has_attr_containing("href", "http")
    with descendants_by_tag(doc, "a").filter(external).limit(2) as links:
        for link in links:
            print(f"  {link.attr('href')}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Quick Start Guide for XML JSON Bridge.

This example walks through the conversion rules: folding, repeated keys,
string preservation, skipped markup and error reporting.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xml_json_bridge import (
    ConverterConfig,
    NestingDepthError,
    XMLSyntaxError,
    XMLToJSONConverter,
    to_json,
    to_json_object,
)

CATALOG = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE catalog>
<catalog>
  <!-- prices in USD -->
  <book id="bk101" available="true">
    <title>XML Developer's Guide</title>
    <price>44.95</price>
  </book>
  <book id="bk102">
    <title><![CDATA[Midnight <Rain>]]></title>
    <price>5.95</price>
  </book>
  <note/>
</catalog>
"""


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - XML JSON Bridge")
    print("=" * 45)

    # Step 1: Convert a document
    print("\n📄 Step 1: Converting a catalog")
    print("-" * 30)

    print(to_json(CATALOG, indent=2))

    # Step 2: Keep every value as text
    print("\n🔤 Step 2: Preserving strings")
    print("-" * 30)

    books = to_json_object(CATALOG, keep_strings=True)["catalog"]["book"]
    for book in books:
        print(f"  {book['id']}: price={book['price']!r}")

    # Step 3: Configured converter with metrics
    print("\n📊 Step 3: Conversion metrics")
    print("-" * 30)

    converter = XMLToJSONConverter(ConverterConfig.untrusted_input())
    result = converter.convert(CATALOG)
    metrics = result.metrics
    print(f"  Elements: {metrics.elements_converted}")
    print(f"  Attributes: {metrics.attributes_converted}")
    print(f"  Max depth: {metrics.max_depth_reached}")
    print(f"  Comments skipped: {metrics.comments_skipped}")
    print(f"  Time: {metrics.processing_time_ms:.2f}ms")


def error_handling_example():
    """Example showing how malformed input is reported."""

    print("\n\n⚠️  ERROR HANDLING EXAMPLE")
    print("=" * 40)

    for xml in ["<a><b></a>", "<a>", "</a>"]:
        try:
            to_json_object(xml)
        except XMLSyntaxError as e:
            print(f"  {xml!r:15} -> {e}")

    converter = XMLToJSONConverter(ConverterConfig(max_nesting_depth=8))
    try:
        converter.convert("<a>" * 20)
    except NestingDepthError as e:
        print(f"  deep document   -> {e}")


if __name__ == "__main__":
    quick_start_example()
    error_handling_example()

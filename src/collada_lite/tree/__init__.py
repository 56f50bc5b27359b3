"""Document grammar, tree types and tree queries.

Key Components:
    DocumentGrammar: Parsers for every production of the document format
    parse_document: Parse source text into a tree with the default grammar
    Header, Tag, ClosedTag, Text, Numbers, NoneNode: Tree node types
    StringAttr, IntAttr: Attribute types
    find_child_by_name, extract_numbers: Tree queries used by extraction
    serialize: Pretty-printer producing re-parseable text
"""

from .grammar import DEFAULT_GRAMMAR, DocumentGrammar, parse_document
from .nodes import (
    Attribute,
    ClosedTag,
    Element,
    Header,
    IntAttr,
    Node,
    NoneNode,
    Numbers,
    StringAttr,
    Tag,
    Text,
)
from .query import (
    count_elements,
    extract_numbers,
    find_child_by_name,
    find_path,
    find_source,
    first_attribute,
    iter_nodes,
    max_depth,
)
from .serializer import format_number, serialize

__all__ = [
    "DEFAULT_GRAMMAR",
    "Attribute",
    "ClosedTag",
    "DocumentGrammar",
    "Element",
    "Header",
    "IntAttr",
    "Node",
    "NoneNode",
    "Numbers",
    "StringAttr",
    "Tag",
    "Text",
    "count_elements",
    "extract_numbers",
    "find_child_by_name",
    "find_path",
    "find_source",
    "first_attribute",
    "format_number",
    "iter_nodes",
    "max_depth",
    "parse_document",
    "serialize",
]

"""Parser combinators over immutable cursors.

Key Components:
    Cursor: Read-only view of the unconsumed input
    Parser: Composable parser value with map/and_/or_/many/many_delim/maybe
    token, until, until_any, whitespace, digit: Lexical primitives
    integer, float_, scientific: Numeric parsers
"""

from .core import (
    Parser,
    and_,
    filter_,
    lazy,
    many,
    many_delim,
    map_,
    maybe,
    or_,
)
from .cursor import Cursor
from .lexical import digit, lookahead, token, until, until_any, whitespace
from .numeric import float_, integer, scientific

__all__ = [
    "Cursor",
    "Parser",
    "and_",
    "digit",
    "filter_",
    "float_",
    "integer",
    "lazy",
    "lookahead",
    "many",
    "many_delim",
    "map_",
    "maybe",
    "or_",
    "scientific",
    "token",
    "until",
    "until_any",
    "whitespace",
]

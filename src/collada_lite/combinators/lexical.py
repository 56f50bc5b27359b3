"""Lexical primitives: literal tokens, scans, whitespace and digits."""

from typing import Iterable, Optional, Tuple

from collada_lite.combinators.core import Parser
from collada_lite.combinators.cursor import Cursor

_DIGITS = "0123456789"


def token(literal: str) -> Parser[str]:
    """Match ``literal`` exactly and consume it."""
    size = len(literal)

    def parse_token(cursor: Cursor) -> Optional[Tuple[Cursor, str]]:
        if not cursor.startswith(literal):
            return None
        return cursor.advance(size), literal

    return Parser(parse_token, name=f"token({literal!r})", default=str)


def lookahead(literal: str) -> Parser[None]:
    """Succeed without consuming when the input starts with ``literal``."""

    def parse_lookahead(cursor: Cursor) -> Optional[Tuple[Cursor, None]]:
        if not cursor.startswith(literal):
            return None
        return cursor, None

    return Parser(parse_lookahead, name=f"lookahead({literal!r})")


def until(char: str) -> Parser[str]:
    """Capture everything before the first ``char``.

    The cursor is left at ``char``. When ``char`` does not occur the parser
    still succeeds, with an empty capture and nothing consumed.
    """

    def parse_until(cursor: Cursor) -> Optional[Tuple[Cursor, str]]:
        index = cursor.find(char)
        if index < 0:
            return cursor, ""
        return cursor.advance(index), cursor.take(index)

    return Parser(parse_until, name=f"until({char!r})", default=str)


def until_any(chars: Iterable[str]) -> Parser[str]:
    """Capture everything before the earliest of ``chars``.

    Same absent-delimiter behaviour as :func:`until`.
    """
    candidates = tuple(chars)

    def parse_until_any(cursor: Cursor) -> Optional[Tuple[Cursor, str]]:
        nearest = -1
        for char in candidates:
            index = cursor.find(char)
            if index >= 0 and (nearest < 0 or index < nearest):
                nearest = index
        if nearest < 0:
            return cursor, ""
        return cursor.advance(nearest), cursor.take(nearest)

    return Parser(
        parse_until_any,
        name=f"until_any({''.join(candidates)!r})",
        default=str,
    )


def whitespace() -> Parser[None]:
    """Consume a run of whitespace; fail when none is present."""

    def parse_whitespace(cursor: Cursor) -> Optional[Tuple[Cursor, None]]:
        char = cursor.peek()
        if char is None or not char.isspace():
            return None
        return cursor.skip_whitespace(), None

    return Parser(parse_whitespace, name="whitespace")


def digit() -> Parser[int]:
    """Parse one ASCII decimal digit into its value."""

    def parse_digit(cursor: Cursor) -> Optional[Tuple[Cursor, int]]:
        char = cursor.peek()
        if char is None or char not in _DIGITS:
            return None
        return cursor.advance(1), _DIGITS.index(char)

    return Parser(parse_digit, name="digit", default=int)

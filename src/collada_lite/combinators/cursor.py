"""Immutable input cursor for the combinator parsers.

A cursor is a view over the source text: the full string plus the offset of
the first unconsumed character. Advancing produces a new cursor, so trying two
alternatives on the same input is simply passing the same cursor twice.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Cursor:
    """Read-only position within a source string."""

    text: str
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate cursor bounds."""
        if not (0 <= self.offset <= len(self.text)):
            raise ValueError("Cursor offset out of range")

    @classmethod
    def of(cls, source: "CursorLike") -> "Cursor":
        """Wrap a string in a cursor, passing existing cursors through."""
        if isinstance(source, Cursor):
            return source
        return cls(source)

    @property
    def remaining(self) -> str:
        """Unconsumed text."""
        return self.text[self.offset:]

    @property
    def at_end(self) -> bool:
        """Check whether all input has been consumed."""
        return self.offset >= len(self.text)

    def __len__(self) -> int:
        return len(self.text) - self.offset

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it."""
        if self.at_end:
            return None
        return self.text[self.offset]

    def startswith(self, prefix: str) -> bool:
        """Check whether the unconsumed text starts with ``prefix``."""
        return self.text.startswith(prefix, self.offset)

    def find(self, char: str) -> int:
        """Return the offset of ``char`` relative to this cursor, or -1."""
        index = self.text.find(char, self.offset)
        if index < 0:
            return -1
        return index - self.offset

    def advance(self, count: int) -> "Cursor":
        """Return a cursor ``count`` characters further along."""
        if count == 0:
            return self
        return Cursor(self.text, self.offset + count)

    def take(self, count: int) -> str:
        """Return the next ``count`` characters as a string."""
        return self.text[self.offset:self.offset + count]

    def skip_whitespace(self) -> "Cursor":
        """Return a cursor past all leading whitespace."""
        index = self.offset
        end = len(self.text)
        while index < end and self.text[index].isspace():
            index += 1
        return self.advance(index - self.offset)

    def __repr__(self) -> str:
        preview = self.remaining[:20]
        return f"Cursor(offset={self.offset}, remaining={preview!r})"


CursorLike = Union[Cursor, str]

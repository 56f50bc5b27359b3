"""Document tree node types.

The tree is a closed set of frozen dataclasses. Consumers dispatch on the node
type with ``isinstance``; nodes have no behaviour beyond a few read-only
conveniences, and children and attributes are held in tuples so that a parsed
tree can never be modified in place.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class StringAttr:
    """Attribute with a raw string value."""

    name: str
    value: str


@dataclass(frozen=True)
class IntAttr:
    """Attribute whose value parsed as an integer."""

    name: str
    value: int


Attribute = Union[StringAttr, IntAttr]


@dataclass(frozen=True)
class NoneNode:
    """Explicit empty node, produced for empty element content."""


@dataclass(frozen=True)
class Header:
    """Document rooted under a ``<?...?>`` prologue."""

    child: "Node"


@dataclass(frozen=True)
class Text:
    """Raw text content."""

    value: str


@dataclass(frozen=True)
class Numbers:
    """Whitespace separated run of numbers."""

    values: Tuple[float, ...] = ()


@dataclass(frozen=True)
class Tag:
    """Element with attributes and child content."""

    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple["Node", ...] = field(default=())

    def attribute(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


@dataclass(frozen=True)
class ClosedTag:
    """Self-closing element."""

    name: str
    attributes: Tuple[Attribute, ...] = ()

    def attribute(self, name: str) -> Optional[Attribute]:
        """Return the first attribute called ``name``."""
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


Node = Union[NoneNode, Header, Text, Numbers, Tag, ClosedTag]
Element = Union[Tag, ClosedTag]

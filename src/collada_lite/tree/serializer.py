"""Pretty-printer that writes trees back in the grammar's own syntax.

Output is chosen so that parsing it again yields an equal tree: element
content is laid out on indented lines only when it consists of child
elements, numbers are written in a form the numeric grammar accepts, and text
is written verbatim between the tags.
"""

import math
from typing import List, Tuple

from collada_lite.tree.nodes import (
    Attribute,
    ClosedTag,
    Header,
    Node,
    NoneNode,
    Numbers,
    Tag,
    Text,
)

PROLOGUE = '<?xml version="1.0" encoding="utf-8"?>'

# Integral floats below this magnitude are written without a fraction.
_INTEGRAL_LIMIT = 1e16
# Overflows the numeric grammar, which saturates it back to infinity.
_INFINITY = "1e400"


def format_number(value: float) -> str:
    """Format a float so the ``scientific`` parser reads the same value.

    Raises:
        ValueError: If ``value`` is NaN
    """
    if math.isnan(value):
        raise ValueError(f"Cannot serialize non-finite number: {value}")
    if math.isinf(value):
        return _INFINITY if value > 0 else "-" + _INFINITY
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    text = repr(value)
    # repr may write "1e+20"; the exponent grammar has no plus sign.
    return text.replace("e+", "e")


def _format_attribute(attribute: Attribute) -> str:
    return f'{attribute.name}="{attribute.value}"'


def _open(name: str, attributes: Tuple[Attribute, ...]) -> str:
    parts = [name]
    parts.extend(_format_attribute(attr) for attr in attributes)
    return " ".join(parts)


def _is_element(node: Node) -> bool:
    return isinstance(node, (Tag, ClosedTag, Header))


def _write(node: Node, depth: int, indent: str, lines: List[str]) -> None:
    pad = indent * depth
    if isinstance(node, Header):
        lines.append(pad + PROLOGUE)
        _write(node.child, depth, indent, lines)
    elif isinstance(node, ClosedTag):
        lines.append(f"{pad}<{_open(node.name, node.attributes)}/>")
    elif isinstance(node, Tag):
        opening = f"<{_open(node.name, node.attributes)}>"
        closing = f"</{node.name}>"
        if node.children and all(_is_element(child) for child in node.children):
            lines.append(pad + opening)
            for child in node.children:
                _write(child, depth + 1, indent, lines)
            lines.append(pad + closing)
        else:
            inline = "".join(_inline(child) for child in node.children)
            lines.append(f"{pad}{opening}{inline}{closing}")
    else:
        lines.append(pad + _inline(node))


def _inline(node: Node) -> str:
    if isinstance(node, NoneNode):
        return ""
    if isinstance(node, Text):
        return node.value
    if isinstance(node, Numbers):
        return " ".join(format_number(value) for value in node.values)
    lines: List[str] = []
    _write(node, 0, "", lines)
    return "".join(lines)


def serialize(node: Node, indent: str = "  ") -> str:
    """Render ``node`` as text.

    Args:
        node: Tree to render
        indent: Indentation added per nesting level

    Returns:
        Document text ending without a trailing newline
    """
    lines: List[str] = []
    _write(node, 0, indent, lines)
    return "\n".join(lines)

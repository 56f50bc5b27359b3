"""Document grammar for the restricted tagged-document format.

The grammar is assembled from the combinators once per ``DocumentGrammar``
instance. Productions are exposed as attributes so callers and tests can run
any of them directly::

    >>> grammar = DocumentGrammar()
    >>> grammar.closed_tag.run("<test/>")
    ('', ClosedTag(name='test', attributes=()))

Supported input: an optional ``<?...?>`` prologue, elements with double-quoted
string or integer attributes, self-closing elements, and element content that
is either nested elements, a run of numbers, or plain text.
"""

from typing import Any, List, Optional, Tuple, Union

from collada_lite.combinators import (
    Cursor,
    Parser,
    integer,
    lazy,
    lookahead,
    scientific,
    token,
    until,
    until_any,
    whitespace,
)
from collada_lite.tree.nodes import (
    Attribute,
    ClosedTag,
    Header,
    IntAttr,
    Node,
    NoneNode,
    Numbers,
    StringAttr,
    Tag,
    Text,
)

_FORBIDDEN_NAME_CHARS = ("/", "<", ">")

# Shape of the raw value produced by the ``tag`` sequence:
# ((((((lt, (name, (ws, attrs))), gt), ((ws, content), ws)), lt_slash), close), gt)
_TagParts = Tuple[str, List[Attribute], List[Node], str]


def _valid_attribute_name(attribute: Attribute) -> bool:
    return not any(char in attribute.name for char in _FORBIDDEN_NAME_CHARS)


def _valid_tag_name(name: str) -> bool:
    return "/" not in name


def _text_node(span: str) -> Node:
    if not span:
        return NoneNode()
    return Text(span)


def _int_attribute(parsed: Tuple[Tuple[Tuple[str, str], int], str]) -> Attribute:
    ((name, _), value), _ = parsed
    return IntAttr(name, value)


def _string_attribute(parsed: Tuple[Tuple[Tuple[str, str], str], str]) -> Attribute:
    ((name, _), value), _ = parsed
    return StringAttr(name, value)


def _tag_parts(parsed: Any) -> _TagParts:
    (((((_, (name, (_, attributes))), _), ((_, content), _)), _), close_name), _ = parsed
    return name, attributes, content, close_name


def _build_tag(parts: _TagParts) -> Node:
    name, attributes, content, _ = parts
    return Tag(name, tuple(attributes), tuple(content))


def _closing_name_matches(parts: _TagParts) -> bool:
    return parts[0] == parts[3]


def _build_closed_tag(parsed: Any) -> Node:
    (_, (name, (_, attributes))), _ = parsed
    return ClosedTag(name, tuple(attributes))


def _build_header(parsed: Any) -> Node:
    return Header(parsed[1])


def _single(node: Node) -> List[Node]:
    return [node]


class DocumentGrammar:
    """Parsers for every production of the document format.

    Args:
        strict_close_tags: Reject elements whose closing name differs from the
            opening name. By default closing names are read and ignored.
        allow_trailing_content: Accept non-whitespace text after the root
            element in :meth:`parse`.
    """

    def __init__(
        self,
        strict_close_tags: bool = False,
        allow_trailing_content: bool = True,
    ) -> None:
        self.strict_close_tags = strict_close_tags
        self.allow_trailing_content = allow_trailing_content

        ws = whitespace()
        optional_ws = ws.maybe()
        element = lazy(lambda: self.document, name="document")

        self.header: Parser[Node] = (
            token("<?")
            .and_(until("?"))
            .and_(token("?>"))
            .and_(optional_ws)
            .and_(element)
            .map(_build_header)
        )

        self.text: Parser[Node] = until("<").map(_text_node)

        self.numbers: Parser[Node] = (
            scientific()
            .many_delim(ws)
            .and_(lookahead("<"))
            .map(lambda parsed: Numbers(tuple(parsed[0])))
        )

        attribute_name = until_any(("=",) + _FORBIDDEN_NAME_CHARS)
        int_attribute = (
            attribute_name
            .and_(token('="'))
            .and_(integer())
            .and_(token('"'))
            .map(_int_attribute)
        )
        string_attribute = (
            attribute_name
            .and_(token('="'))
            .and_(until('"'))
            .and_(token('"'))
            .map(_string_attribute)
        )
        self.attribute: Parser[Attribute] = (
            int_attribute.or_(string_attribute).filter(_valid_attribute_name)
        )
        attributes = self.attribute.many_delim(ws).maybe()

        self.open_tag_name: Parser[str] = until_any((">", " ")).filter(_valid_tag_name)
        self.closed_tag_name: Parser[str] = (
            until_any(("/", " ")).filter(_valid_tag_name)
        )

        content = (
            element.many_delim(optional_ws)
            .or_(self.numbers.map(_single))
            .or_(self.text.map(_single))
        )
        tag_parts = (
            token("<")
            .and_(self.open_tag_name.and_(optional_ws.and_(attributes)))
            .and_(token(">"))
            .and_(optional_ws.and_(content).and_(optional_ws))
            .and_(token("</"))
            .and_(until(">"))
            .and_(token(">"))
            .map(_tag_parts)
        )
        if strict_close_tags:
            tag_parts = tag_parts.filter(_closing_name_matches)
        self.tag: Parser[Node] = tag_parts.map(_build_tag)

        self.closed_tag: Parser[Node] = (
            token("<")
            .and_(self.closed_tag_name.and_(optional_ws.and_(attributes)))
            .and_(token("/>"))
            .map(_build_closed_tag)
        )

        self.document: Parser[Node] = (
            self.header.or_(self.tag).or_(self.closed_tag)
        )

    def __repr__(self) -> str:
        return (
            f"DocumentGrammar(strict_close_tags={self.strict_close_tags}, "
            f"allow_trailing_content={self.allow_trailing_content})"
        )

    def parse_with_rest(
        self, source: Union[Cursor, str]
    ) -> Optional[Tuple[Cursor, Node]]:
        """Parse one document, returning the tree and the unconsumed cursor."""
        return self.document.parse(source)

    def parse(self, source: Union[Cursor, str]) -> Optional[Node]:
        """Parse one document and return its tree, or ``None`` on failure."""
        outcome = self.document.parse(source)
        if outcome is None:
            return None
        rest, tree = outcome
        if not self.allow_trailing_content and not rest.skip_whitespace().at_end:
            return None
        return tree


DEFAULT_GRAMMAR = DocumentGrammar()


def parse_document(
    source: Union[Cursor, str], grammar: Optional[DocumentGrammar] = None
) -> Optional[Node]:
    """Parse ``source`` with ``grammar`` (lenient defaults when omitted)."""
    return (grammar or DEFAULT_GRAMMAR).parse(source)

"""Combinator core: the Parser value and its composition operators.

A parser wraps a pure function ``Cursor -> Optional[(Cursor, value)]``.
``None`` is the only failure signal; there are no messages or positions.
Every operator is available both as a method (``digit().many()``) and as a
module-level function (``many(digit())``), and always returns a new parser.
"""

from typing import (
    Any,
    Callable,
    Generic,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from collada_lite.combinators.cursor import Cursor

T = TypeVar("T")
U = TypeVar("U")

ParseOutcome = Optional[Tuple[Cursor, T]]
ParseFunction = Callable[[Cursor], "ParseOutcome[T]"]

_NO_DEFAULT = object()


class Parser(Generic[T]):
    """Composable parser value.

    Args:
        function: The parse function this value wraps
        name: Optional label shown in ``repr`` for debugging
        default: Zero-argument factory for the value ``maybe`` yields when
            the parser fails (``None`` when not given)
    """

    __slots__ = ("_function", "name", "_default")

    def __init__(
        self,
        function: ParseFunction,
        name: Optional[str] = None,
        default: Optional[Callable[[], T]] = None,
    ) -> None:
        self._function = function
        self.name = name or getattr(function, "__name__", "parser")
        self._default = default

    def __call__(self, cursor: Cursor) -> "ParseOutcome[T]":
        return self._function(cursor)

    def __repr__(self) -> str:
        return f"Parser({self.name})"

    def parse(self, source: Union[Cursor, str]) -> "ParseOutcome[T]":
        """Run the parser on a cursor or a plain string."""
        return self._function(Cursor.of(source))

    def run(self, source: Union[Cursor, str]) -> Optional[Tuple[str, T]]:
        """Run the parser and return ``(remaining_text, value)`` or ``None``."""
        outcome = self.parse(source)
        if outcome is None:
            return None
        rest, value = outcome
        return rest.remaining, value

    def default(self) -> Any:
        """Produce this parser's default value."""
        if self._default is None:
            return None
        return self._default()

    # Composition operators ------------------------------------------------

    def map(
        self, transform: Callable[[T], U], default: Optional[Callable[[], U]] = None
    ) -> "Parser[U]":
        """Apply ``transform`` to the produced value."""
        return map_(self, transform, default)

    def and_(self, other: "Parser[U]") -> "Parser[Tuple[T, U]]":
        """Sequence with ``other``; produce both values as a pair."""
        return and_(self, other)

    def or_(self, other: "Parser[T]") -> "Parser[T]":
        """Try ``other`` on the same input when this parser fails."""
        return or_(self, other)

    def many(self) -> "Parser[List[T]]":
        """Repeat one or more times."""
        return many(self)

    def many_delim(self, delimiter: "Parser[Any]") -> "Parser[List[T]]":
        """Repeat one or more times separated by ``delimiter``."""
        return many_delim(self, delimiter)

    def maybe(self, default: Any = _NO_DEFAULT) -> "Parser[T]":
        """Never fail; yield ``default`` without consuming on failure."""
        return maybe(self, default)

    def filter(self, predicate: Callable[[T], bool]) -> "Parser[T]":
        """Fail when ``predicate`` rejects the produced value."""
        return filter_(self, predicate)


def map_(
    parser: Parser[T],
    transform: Callable[[T], U],
    default: Optional[Callable[[], U]] = None,
) -> Parser[U]:
    """Succeed iff ``parser`` succeeds, transforming its value.

    The default is the ``default`` factory when given, otherwise the wrapped
    parser's default unchanged. Pass a factory when ``transform`` changes
    the value's type.
    """

    def parse_map(cursor: Cursor) -> "ParseOutcome[U]":
        outcome = parser(cursor)
        if outcome is None:
            return None
        rest, value = outcome
        return rest, transform(value)

    return Parser(
        parse_map, name=f"map({parser.name})", default=default or parser.default
    )


def and_(first: Parser[T], second: Parser[U]) -> Parser[Tuple[T, U]]:
    """Run ``first`` then ``second`` on what remains; produce a pair.

    There is no retry: when ``second`` fails the whole sequence fails.
    """

    def parse_and(cursor: Cursor) -> "ParseOutcome[Tuple[T, U]]":
        outcome = first(cursor)
        if outcome is None:
            return None
        rest, left = outcome
        outcome = second(rest)
        if outcome is None:
            return None
        rest, right = outcome
        return rest, (left, right)

    return Parser(
        parse_and,
        name=f"and({first.name}, {second.name})",
        default=lambda: (first.default(), second.default()),
    )


def or_(first: Parser[T], second: Parser[T]) -> Parser[T]:
    """Ordered alternation: the first branch that succeeds wins."""

    def parse_or(cursor: Cursor) -> "ParseOutcome[T]":
        outcome = first(cursor)
        if outcome is not None:
            return outcome
        return second(cursor)

    return Parser(
        parse_or,
        name=f"or({first.name}, {second.name})",
        default=first.default,
    )


def many(parser: Parser[T]) -> Parser[List[T]]:
    """One or more repetitions of ``parser``.

    The result cursor is the one left by the last success. A success that
    consumes nothing stops the repetition.
    """

    def parse_many(cursor: Cursor) -> "ParseOutcome[List[T]]":
        outcome = parser(cursor)
        if outcome is None:
            return None
        cursor, value = outcome
        values = [value]
        while True:
            outcome = parser(cursor)
            if outcome is None:
                return cursor, values
            rest, value = outcome
            if rest.offset == cursor.offset:
                return cursor, values
            cursor = rest
            values.append(value)

    return Parser(parse_many, name=f"many({parser.name})", default=list)


def many_delim(parser: Parser[T], delimiter: Parser[Any]) -> Parser[List[T]]:
    """One or more ``parser`` values separated by ``delimiter``.

    A trailing delimiter is consumed and dropped: when the delimiter matches
    but the next element does not, the values gathered so far are returned
    with the cursor positioned after that delimiter.
    """

    def parse_many_delim(cursor: Cursor) -> "ParseOutcome[List[T]]":
        outcome = parser(cursor)
        if outcome is None:
            return None
        cursor, value = outcome
        values = [value]
        while True:
            separated = delimiter(cursor)
            if separated is None:
                return cursor, values
            after_delimiter = separated[0]
            outcome = parser(after_delimiter)
            if outcome is None:
                return after_delimiter, values
            rest, value = outcome
            values.append(value)
            if rest.offset == cursor.offset:
                return rest, values
            cursor = rest

    return Parser(
        parse_many_delim,
        name=f"many_delim({parser.name}, {delimiter.name})",
        default=list,
    )


def maybe(parser: Parser[T], default: Any = _NO_DEFAULT) -> Parser[T]:
    """Optional ``parser``: on failure yield a default and consume nothing.

    The default is ``default`` when given, otherwise the wrapped parser's own
    default factory (empty string for tokens, empty list for repetitions).
    """
    if default is _NO_DEFAULT:
        make_default = parser.default
    else:
        def make_default() -> Any:
            return default

    def parse_maybe(cursor: Cursor) -> "ParseOutcome[T]":
        outcome = parser(cursor)
        if outcome is None:
            return cursor, make_default()
        return outcome

    return Parser(parse_maybe, name=f"maybe({parser.name})", default=make_default)


def filter_(parser: Parser[T], predicate: Callable[[T], bool]) -> Parser[T]:
    """Succeed only when ``predicate`` accepts the produced value."""

    def parse_filter(cursor: Cursor) -> "ParseOutcome[T]":
        outcome = parser(cursor)
        if outcome is None or not predicate(outcome[1]):
            return None
        return outcome

    return Parser(
        parse_filter,
        name=f"filter({parser.name})",
        default=parser.default,
    )


def lazy(factory: Callable[[], Parser[T]], name: str = "lazy") -> Parser[T]:
    """Defer building a parser until it first runs.

    Recursive grammar rules refer to themselves through ``lazy``.
    """
    resolved: List[Parser[T]] = []

    def parse_lazy(cursor: Cursor) -> "ParseOutcome[T]":
        if not resolved:
            resolved.append(factory())
        return resolved[0](cursor)

    return Parser(parse_lazy, name=name)

"""Numeric parsers built from digits and tokens.

Numbers are assembled from their digits by place value rather than handed to
``float()``, so the accepted syntax is exactly what the combinators describe:
an optional minus sign, digits, an optional fraction and an optional ``e``
exponent. There is no ``+`` sign, no leading ``.`` and no overflow checking.

Decimals are kept exact as ``(significand, scale)`` until the exponent is
known and are rounded to a float once, so the shortest ``repr`` of any float
reads back as that same float.
"""

import math
from typing import List, Tuple

from collada_lite.combinators.core import Parser
from collada_lite.combinators.lexical import digit, token

# Decimal magnitudes past these bounds are inf or 0.0 for any float.
_MAX_MAGNITUDE = 400
_LOG10_2 = math.log10(2)

Decimal = Tuple[int, int]


def _place_value(digits: List[int]) -> int:
    """Combine digits, treating the last one as least significant."""
    result = 0
    power = 0
    for value in reversed(digits):
        result += value * 10 ** power
        power += 1
    return result


def _to_float(significand: int, power: int) -> float:
    """Return ``significand * 10 ** power`` rounded once to the nearest float.

    Out of range values saturate to ``inf`` or ``0.0`` instead of raising.
    """
    if significand == 0:
        return 0.0
    magnitude = significand.bit_length() * _LOG10_2 + power
    if magnitude > _MAX_MAGNITUDE:
        return math.inf
    if magnitude < -_MAX_MAGNITUDE:
        return 0.0
    try:
        if power >= 0:
            return float(significand * 10 ** power)
        # int / int is correctly rounded
        return significand / 10 ** -power
    except OverflowError:
        return math.inf


def _negative_integer(parsed: Tuple[str, List[int]]) -> int:
    return -_place_value(parsed[1])


def _fixed_point(parsed: Tuple[List[int], Tuple[str, List[int]]]) -> Decimal:
    whole, (_, fraction) = parsed
    return _place_value(whole + fraction), len(fraction)


def _whole_number(digits: List[int]) -> Decimal:
    return _place_value(digits), 0


def _decimal_value(decimal: Decimal) -> float:
    significand, scale = decimal
    return _to_float(significand, -scale)


def _with_exponent(parsed: Tuple[Tuple[Decimal, str], int]) -> float:
    ((significand, scale), _), exponent = parsed
    return _to_float(significand, exponent - scale)


def _negated(parsed: Tuple[str, float]) -> float:
    return -parsed[1]


def _decimal() -> Parser[Decimal]:
    digits = digit().many()
    return (
        digits.and_(token(".").and_(digits)).map(_fixed_point)
        .or_(digits.map(_whole_number))
    )


def integer() -> Parser[int]:
    """Optionally negative run of digits."""
    digits = digit().many()
    parser = (
        token("-").and_(digits).map(_negative_integer)
        .or_(digits.map(_place_value))
    )
    return Parser(parser, name="integer", default=int)


def float_() -> Parser[float]:
    """Unsigned decimal: ``digits.digits`` tried before plain ``digits``."""
    return Parser(_decimal().map(_decimal_value), name="float", default=float)


def scientific() -> Parser[float]:
    """Decimal with optional sign and ``e`` exponent.

    Alternatives are tried in a fixed order: negative with exponent, positive
    with exponent, negative, positive. The order matters because the
    alternation keeps the first branch that succeeds.
    """
    number = _decimal()
    minus = token("-")
    with_exponent = number.and_(token("e")).and_(integer()).map(_with_exponent)
    plain = number.map(_decimal_value)
    parser = (
        minus.and_(with_exponent).map(_negated)
        .or_(with_exponent)
        .or_(minus.and_(plain).map(_negated))
        .or_(plain)
    )
    return Parser(parser, name="scientific", default=float)

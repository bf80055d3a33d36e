"""Bounds-checked parsing of numeric tokens."""

from __future__ import annotations

import math

from ninja_xss.errors import InvalidInputError
from ninja_xss.grammar import XSSGrammar


def parse_bounded_integer(value: str, minimum: int, maximum: int, grammar: XSSGrammar) -> int:
    """Parse a base-10 integer literal and check it against ``[minimum, maximum]``.

    Only an optional sign followed by ASCII digits is accepted; whitespace,
    underscores and other literal forms ``int()`` would tolerate are rejected.

    Raises:
        InvalidInputError: If the literal is malformed or out of range.
    """
    if minimum > maximum:
        raise InvalidInputError("integer", f"minimum {minimum} exceeds maximum {maximum}")
    if not grammar.integer_literal.fullmatch(value):
        raise InvalidInputError("integer", "not a base-10 integer literal")
    try:
        number = int(value)
    except ValueError as exc:
        # int() refuses literals beyond the interpreter's digit limit
        raise InvalidInputError("integer", "integer literal too long") from exc
    if number < minimum:
        raise InvalidInputError("integer", f"value below minimum {minimum}")
    if number > maximum:
        raise InvalidInputError("integer", f"value above maximum {maximum}")
    return number


def parse_bounded_float(value: str, minimum: float, maximum: float, grammar: XSSGrammar) -> float:
    """Parse a decimal literal and check it against ``[minimum, maximum]``.

    NaN and infinities are never valid, including literals that overflow to
    infinity.

    Raises:
        InvalidInputError: If the literal is malformed, not finite or out of range.
    """
    if minimum > maximum:
        raise InvalidInputError("double", f"minimum {minimum} exceeds maximum {maximum}")
    if not grammar.decimal_literal.fullmatch(value):
        raise InvalidInputError("double", "not a decimal literal")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError("double", "value is not finite")
    if number < minimum:
        raise InvalidInputError("double", f"value below minimum {minimum}")
    if number > maximum:
        raise InvalidInputError("double", f"value above maximum {maximum}")
    return number

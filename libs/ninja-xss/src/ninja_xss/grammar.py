"""Compiled grammars for token-level validation.

The CSS token grammar follows the token diagrams of CSS Syntax Level 3
(http://www.w3.org/TR/css-syntax-3/). Every sub-grammar is written so that each
alternative can match a given prefix in at most a bounded number of ways, which
keeps full matches linear in the input length on Python's backtracking engine.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# C0 control characters the CSS ident and url grammars treat as non-ASCII code points.
_NON_ASCII = r"\x00\x08\x0b\x0c\x0e-\x1f"

# number-token: sign, optional mantissa with at most one dot, optional exponent.
# Matches the empty string, "+", "." and so on, like the token diagram does.
_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d*)?(?:e[+-]?\d+)?"

# hash-token restricted to hex digits.
_HEX_DIGITS = r"#[0-9a-f]*"

# ident-token
_IDENTIFIER = rf"-?[a-z_{_NON_ASCII}][\w\-{_NON_ASCII}]*"

# string-token; a "javascript:" sequence may not start anywhere inside the quotes.
_STRING = (
    r'"(?:(?!javascript\s?:)[^"^\\\n]|\\")*"'
    r"|'(?:(?!javascript\s?:)[^'^\\\n]|\\')*'"
)

# dimension-token and percentage-token
_DIMENSION = _NUMBER + _IDENTIFIER
_PERCENT = _NUMBER + "%"

# function-token followed by a flat argument list. A run of numbers, identifiers,
# whitespace and commas covers exactly the characters in this class.
_FUNCTION = _IDENTIFIER + rf"\([+\-.\w\s,{_NON_ASCII}]*\)"

# url-token, unquoted or quoted
_URL_UNQUOTED = rf"[^\"'^(){_NON_ASCII}]*"
_URL = rf"url\((?:{_URL_UNQUOTED}|{_STRING})\)"

_CSS_TOKEN = "|".join(
    f"(?:{alternative})"
    for alternative in (
        _NUMBER,
        _DIMENSION,
        _PERCENT,
        _HEX_DIGITS,
        _IDENTIFIER,
        _STRING,
        _FUNCTION,
        _URL,
    )
)

# Only what hex and functional colour notation need. No "x" (expression(...)),
# no "u" (url(...)) and no ";" (leaving the declaration).
_CSS_COLOR_FUNCTIONAL = r"[#a-fghlrs(+0-9\-.%,) \t\n\x0b\f\r]+"
_CSS_COLOR_NAMED = r"[a-z \t\n\x0b\f\r]+"

_JS_IDENTIFIER = r"[0-9a-zA-Z_$][0-9a-zA-Z_$.]*"

_AUTO_DIMENSION = r"['\"]?auto['\"]?"

# "/ns:" at the start of a path segment
_NAMESPACE_SEGMENT = r"/([^:/]+):"

_INTEGER_LITERAL = r"[+-]?\d+"
_DECIMAL_LITERAL = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:e[+-]?\d+)?"


@dataclass(frozen=True)
class XSSGrammar:
    """Immutable bundle of every pattern the validators match against."""

    css_token: re.Pattern[str]
    css_color_functional: re.Pattern[str]
    css_color_named: re.Pattern[str]
    js_identifier: re.Pattern[str]
    auto_dimension: re.Pattern[str]
    namespace_segment: re.Pattern[str]
    integer_literal: re.Pattern[str]
    decimal_literal: re.Pattern[str]


def compile_grammar() -> XSSGrammar:
    """Compile every grammar once; the result is safe to share between threads."""
    folded = re.ASCII | re.IGNORECASE
    return XSSGrammar(
        css_token=re.compile(_CSS_TOKEN, folded),
        css_color_functional=re.compile(_CSS_COLOR_FUNCTIONAL, folded),
        css_color_named=re.compile(_CSS_COLOR_NAMED, folded),
        js_identifier=re.compile(_JS_IDENTIFIER, re.ASCII),
        auto_dimension=re.compile(_AUTO_DIMENSION, re.ASCII),
        namespace_segment=re.compile(_NAMESPACE_SEGMENT),
        integer_literal=re.compile(_INTEGER_LITERAL, re.ASCII),
        decimal_literal=re.compile(_DECIMAL_LITERAL, folded),
    )


def is_valid_style_token(token: str, grammar: XSSGrammar) -> bool:
    """Return True if *token* is, in its entirety, a single CSS value token."""
    return grammar.css_token.fullmatch(token) is not None


def is_valid_css_color(color: str, grammar: XSSGrammar) -> bool:
    """Return True for hex, functional or named colour values."""
    return (
        grammar.css_color_functional.fullmatch(color) is not None
        or grammar.css_color_named.fullmatch(color) is not None
    )


def is_js_identifier(token: str, grammar: XSSGrammar) -> bool:
    return grammar.js_identifier.fullmatch(token) is not None

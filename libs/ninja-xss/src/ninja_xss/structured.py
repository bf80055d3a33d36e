"""Structural parsers used as well-formedness oracles for JSON and XML."""

from __future__ import annotations

import io
import json
import re
import xml.sax
from typing import Any
from xml.sax.handler import (
    ContentHandler,
    feature_external_ges,
    feature_external_pes,
    feature_namespaces,
    feature_validation,
)

from ninja_xss.errors import InvalidInputError

# A string literal (possibly unterminated), a line comment or a block comment.
_JSON_STRING_OR_COMMENT = re.compile(r'"(?:\\.|[^"\\])*(?:"|\Z)|//[^\n]*|/\*.*?(?:\*/|\Z)', re.DOTALL)


def _blank_comment(match: re.Match[str]) -> str:
    token = match.group(0)
    if token.startswith('"'):
        return token
    if token.startswith("/*") and (len(token) < 4 or not token.endswith("*/")):
        # unterminated block comment stays so the parser rejects it
        return token
    return " "


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class JSONStructureParser:
    """Stateless JSON parser; one instance can serve any number of threads.

    Args:
        allow_comments: Accept ``//`` and ``/* */`` comments outside string
            literals. Comments are dropped from the serialized form.
    """

    def __init__(self, allow_comments: bool = True) -> None:
        self._allow_comments = allow_comments

    def _load(self, text: str) -> Any:
        if self._allow_comments:
            text = _JSON_STRING_OR_COMMENT.sub(_blank_comment, text)
        return json.loads(text, parse_constant=_reject_constant)

    def parse_object(self, text: str) -> dict[str, Any]:
        value = self._load(text)
        if not isinstance(value, dict):
            raise InvalidInputError("json", f"expected an object, got {type(value).__name__}")
        return value

    def parse_array(self, text: str) -> list[Any]:
        value = self._load(text)
        if not isinstance(value, list):
            raise InvalidInputError("json", f"expected an array, got {type(value).__name__}")
        return value

    def serialize(self, value: dict[str, Any] | list[Any]) -> str:
        """Compact JSON text; raises ``ValueError`` for values strict JSON cannot carry.

        Number literals that overflow to infinity and lone surrogates from
        ``\\ud800``-style escapes both parse, but neither can be written back.
        """
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidInputError("json", "string contains a lone surrogate") from exc
        return text


class SAXStructureParser:
    """Non-validating, namespace-aware XML well-formedness checker.

    External DTDs, external general entities and external parameter entities are
    never loaded. expat readers are not reentrant, so every check builds its own.
    """

    def _new_reader(self) -> xml.sax.xmlreader.XMLReader:
        reader = xml.sax.make_parser()
        reader.setFeature(feature_namespaces, True)
        reader.setFeature(feature_validation, False)
        reader.setFeature(feature_external_ges, False)
        reader.setFeature(feature_external_pes, False)
        reader.setContentHandler(ContentHandler())
        return reader

    def check_well_formed(self, text: str) -> None:
        """Parse *text*; raises ``xml.sax.SAXParseException`` if it is not well formed."""
        self._new_reader().parse(io.StringIO(text))

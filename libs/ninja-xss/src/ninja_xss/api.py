"""XSS protection service: context-aware validators, encoders and the markup filter.

Every public method resolves failures to the caller's default (or ``""`` where
there is none); nothing raises across this boundary. Failures are logged at
WARNING with the exception type only; the raw input goes to DEBUG.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from ninja_xss import escaping
from ninja_xss.config import XSSConfig
from ninja_xss.filter import NH3ContentFilter, ProtectionContext
from ninja_xss.grammar import XSSGrammar, compile_grammar, is_js_identifier, is_valid_css_color, is_valid_style_token
from ninja_xss.numeric import parse_bounded_float, parse_bounded_integer
from ninja_xss.protocols import ContentFilter, JSONParser, XMLParser
from ninja_xss.structured import JSONStructureParser, SAXStructureParser
from ninja_xss.uri import encode_attribute_unsafe, mangle_namespaces

logger = logging.getLogger(__name__)

T = TypeVar("T")

_QUOTES = ("'", '"')


@dataclass(frozen=True)
class XSSRuntime:
    """Everything the service needs, built once by :func:`initialize`."""

    config: XSSConfig
    grammar: XSSGrammar
    content_filter: ContentFilter
    json_parser: JSONParser
    xml_parser: XMLParser


def initialize(
    config: XSSConfig | None = None,
    *,
    content_filter: ContentFilter | None = None,
    json_parser: JSONParser | None = None,
    xml_parser: XMLParser | None = None,
) -> XSSRuntime:
    """Compile the grammars and build the collaborators.

    Must complete before the runtime is shared between threads; afterwards it is
    read-only. Collaborators not supplied are built from *config*.
    """
    config = config or XSSConfig()
    return XSSRuntime(
        config=config,
        grammar=compile_grammar(),
        content_filter=content_filter or NH3ContentFilter(config),
        json_parser=json_parser or JSONStructureParser(allow_comments=config.json_allow_comments),
        xml_parser=xml_parser or SAXStructureParser(),
    )


class XSSAPI:
    """Validators and encoders for embedding untrusted strings in HTML, XML, JS, CSS and URLs."""

    def __init__(self, runtime: XSSRuntime | None = None) -> None:
        self._runtime = runtime or initialize()

    @property
    def runtime(self) -> XSSRuntime:
        return self._runtime

    def _parse_or_default(self, kind: str, value: str | None, default: T, parse: Callable[[str], T]) -> T:
        if not value:
            return default
        try:
            return parse(value)
        except Exception as exc:
            logger.warning("Unable to get a valid %s from the input: %s", kind, type(exc).__name__)
            logger.debug("%s input: %r", kind, value)
            return default

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    def get_valid_integer(self, value: str | None, default: int) -> int:
        cfg, grammar = self._runtime.config, self._runtime.grammar
        return self._parse_or_default(
            "integer",
            value,
            default,
            lambda v: parse_bounded_integer(v, cfg.integer_min, cfg.integer_max, grammar),
        )

    def get_valid_long(self, value: str | None, default: int) -> int:
        cfg, grammar = self._runtime.config, self._runtime.grammar
        return self._parse_or_default(
            "long",
            value,
            default,
            lambda v: parse_bounded_integer(v, cfg.long_min, cfg.long_max, grammar),
        )

    def get_valid_double(self, value: str | None, default: float) -> float:
        cfg, grammar = self._runtime.config, self._runtime.grammar
        return self._parse_or_default(
            "double",
            value,
            default,
            lambda v: parse_bounded_float(v, cfg.double_min, cfg.double_max, grammar),
        )

    def get_valid_dimension(self, value: str | None, default: str) -> str:
        """Return ``'"auto"'`` for (optionally quoted) ``auto``, else a bounded integer as a string."""
        if not value:
            return default
        if self._runtime.grammar.auto_dimension.fullmatch(value.strip()):
            return '"auto"'
        cfg, grammar = self._runtime.config, self._runtime.grammar
        return self._parse_or_default(
            "dimension",
            value,
            default,
            lambda v: str(parse_bounded_integer(v, cfg.dimension_min, cfg.dimension_max, grammar)),
        )

    def get_valid_href(self, value: str | None) -> str:
        """Return a link target safe for an HTML attribute, or ``""``.

        Characters that end an unquoted attribute value are percent-encoded,
        namespaced path segments are mangled and the result must then pass the
        content filter's link policy.
        """
        if not value:
            return ""
        try:
            encoded = mangle_namespaces(encode_attribute_unsafe(value), self._runtime.grammar)
            if self._runtime.content_filter.is_valid_href(encoded):
                return encoded
        except Exception as exc:
            logger.warning("Unable to validate URL: %s", type(exc).__name__)
            logger.debug("Passed URL: %r", value)
        return ""

    def get_valid_js_token(self, value: str | None, default: str) -> str:
        """Return a JavaScript string literal (re-encoded) or identifier, else *default*."""
        if not value:
            return default
        token = value.strip()
        if len(token) >= 2 and token[0] in _QUOTES and token[-1] == token[0]:
            quote = token[0]
            return f"{quote}{self.encode_for_js_string(token[1:-1])}{quote}"
        if is_js_identifier(token, self._runtime.grammar):
            return token
        return default

    def get_valid_style_token(self, value: str | None, default: str) -> str:
        if value and is_valid_style_token(value, self._runtime.grammar):
            return value
        return default

    def get_valid_css_color(self, value: str | None, default: str) -> str:
        if not value:
            return default
        color = value.strip()
        if is_valid_css_color(color, self._runtime.grammar):
            return color
        return default

    def get_valid_multi_line_comment(self, value: str | None, default: str) -> str:
        """Reject comments that would close a ``/* ... */`` block early."""
        if value is not None and "*/" not in value:
            return value
        return default

    def _check_json(self, value: str | None) -> str | None:
        """Re-serialised JSON, ``""`` for blank input, or None when invalid."""
        if value is None:
            return None
        text = value.strip()
        if not text:
            return ""
        parser = self._runtime.json_parser
        curly = text.find("{")
        straight = text.find("[")
        try:
            if curly >= 0 and (straight < 0 or curly < straight):
                return parser.serialize(parser.parse_object(text))
            return parser.serialize(parser.parse_array(text))
        except Exception as exc:
            logger.warning("Unable to get valid JSON from the input: %s", type(exc).__name__)
            logger.debug("JSON input:\n%s", text)
            return None

    def get_valid_json(self, value: str | None, default: str | None) -> str:
        """Return *value* re-serialised if it is a JSON object or array.

        Otherwise *default* is validated the same way, and if that fails too
        the result is ``""``.
        """
        result = self._check_json(value)
        if result is None:
            result = self._check_json(default)
        return "" if result is None else result

    def _check_xml(self, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            return ""
        try:
            self._runtime.xml_parser.check_well_formed(text)
            return text
        except Exception as exc:
            logger.warning("Unable to get valid XML from the input: %s", type(exc).__name__)
            logger.debug("XML input:\n%s", text)
            return None

    def get_valid_xml(self, value: str | None, default: str | None) -> str:
        """Return the trimmed *value* if it is well-formed XML.

        Otherwise *default* is checked the same way, and if that fails too the
        result is ``""``.
        """
        result = self._check_xml(value)
        if result is None:
            result = self._check_xml(default)
        return "" if result is None else result

    # ------------------------------------------------------------------
    # Encoders
    # ------------------------------------------------------------------

    def encode_for_html(self, value: str | None) -> str | None:
        return None if value is None else escaping.escape_html(value)

    def encode_for_html_attr(self, value: str | None) -> str | None:
        return None if value is None else escaping.escape_html_attribute(value)

    def encode_for_xml(self, value: str | None) -> str | None:
        return None if value is None else escaping.escape_xml(value)

    def encode_for_xml_attr(self, value: str | None) -> str | None:
        return None if value is None else escaping.escape_xml_attribute(value)

    def encode_for_js_string(self, value: str | None) -> str | None:
        """Escape for a JS string literal; hyphens become ``\\u002D`` so no ``-->`` survives."""
        if value is None:
            return None
        return escaping.escape_js_string(value).replace("\\-", "\\u002D")

    def encode_for_css_string(self, value: str | None) -> str | None:
        return None if value is None else escaping.escape_css_string(value)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def filter_html(self, value: str | None) -> str:
        """Strip markup the content policy disallows; never returns None."""
        if not value:
            return ""
        try:
            return self._runtime.content_filter.filter(ProtectionContext.HTML_HTML_CONTENT, value)
        except Exception as exc:
            logger.warning("Unable to filter HTML: %s", type(exc).__name__)
            logger.debug("HTML input:\n%s", value)
            return ""

    def check_html(self, value: str | None, context: ProtectionContext = ProtectionContext.HTML_HTML_CONTENT) -> bool:
        """Return True if filtering *value* for *context* would leave it unchanged."""
        if not value:
            return True
        try:
            return self._runtime.content_filter.filter(context, value) == value
        except Exception as exc:
            logger.warning("Unable to check HTML: %s", type(exc).__name__)
            logger.debug("HTML input:\n%s", value)
            return False

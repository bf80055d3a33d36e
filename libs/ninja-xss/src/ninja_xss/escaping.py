"""Low-level escaping primitives, one per output context.

HTML and XML escaping goes through markupsafe. JavaScript and CSS string
escaping map each special character through a per-context replacer.
"""

from __future__ import annotations

import re

from markupsafe import escape

# Characters that may not appear in an HTML or XML 1.0 document at all: C0
# controls other than tab/LF/CR, DEL, lone surrogates and the two non-characters.
_INVALID_MARKUP_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\x7f\ud800-\udfff\ufffe\uffff]")

_ESCAPE_MAP_FOR_JS_STRING = {
    "\x08": "\\b",
    "\x09": "\\t",
    "\x0a": "\\n",
    "\x0b": "\\x0b",
    "\x0c": "\\f",
    "\x0d": "\\r",
    "/": "\\/",
    "\\": "\\\\",
    "-": "\\-",
}

_MATCHER_FOR_JS_STRING = re.compile('[\x00-\x1f"&\'\\-/<>\\\\\x7f\u2028\u2029]')

_ESCAPE_MAP_FOR_CSS_STRING = {
    "\\": "\\\\",
}

_MATCHER_FOR_CSS_STRING = re.compile('[\x00-\x1f"&\'()*/:;<>@{}\\\\\x7f\u2028\u2029]')


def _replacer_for_js(match: re.Match[str]) -> str:
    char = match.group(0)
    encoded = _ESCAPE_MAP_FOR_JS_STRING.get(char)
    if encoded is None:
        # "\u2028" -> "\\u2028", '"' -> "\\x22"
        code = ord(char)
        encoded = f"\\x{code:02x}" if code < 0x100 else f"\\u{code:04x}"
    return encoded


def _replacer_for_css(match: re.Match[str]) -> str:
    char = match.group(0)
    encoded = _ESCAPE_MAP_FOR_CSS_STRING.get(char)
    if encoded is None:
        # trailing space terminates the hex escape
        encoded = f"\\{ord(char):x} "
    return encoded


def _scrub_markup(value: str) -> str:
    return _INVALID_MARKUP_CHARS.sub(" ", value)


def escape_html(value: str) -> str:
    """ '<b>' -> '&lt;b&gt;' """
    return str(escape(_scrub_markup(value)))


# markupsafe encodes both quote styles with numeric references, which are valid
# in attribute values and in XML as well.
escape_html_attribute = escape_html
escape_xml = escape_html
escape_xml_attribute = escape_html


def escape_js_string(value: str) -> str:
    """ '</script>' -> '\\x3c\\/script\\x3e' """
    return _MATCHER_FOR_JS_STRING.sub(_replacer_for_js, value)


def escape_css_string(value: str) -> str:
    """ '</style>' -> '\\3c \\2f style\\3e ' """
    return _MATCHER_FOR_CSS_STRING.sub(_replacer_for_css, value)

"""URI namespace mangling.

Repository-style paths name nodes with a namespace prefix (``/jcr:content``).
Consumers that expect plain identifiers in path segments get the mangled form
instead (``/_jcr_content``), which the consuming system can map back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import quote, unquote, urlsplit

from ninja_xss.errors import URISyntaxError
from ninja_xss.grammar import XSSGrammar

# Characters that end an unquoted HTML attribute value. "=" is left alone so
# query strings keep working.
_ATTRIBUTE_UNSAFE = str.maketrans(
    {
        '"': "%22",
        "'": "%27",
        ">": "%3E",
        "<": "%3C",
        "`": "%60",
        " ": "%20",
    }
)

# Never legal anywhere in a URI reference.
_ILLEGAL_URI_CHARS = re.compile(r'[\x00-\x20\x7f"<>\\^`{|}]')

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# pchar (RFC 3986) plus "/", minus the single quote.
_PATH_SAFE = "/:@!$&()*+,;="


def encode_attribute_unsafe(url: str) -> str:
    """Percent-encode the characters that are unsafe in an unquoted attribute value."""
    return url.translate(_ATTRIBUTE_UNSAFE)


def _percent_decode(value: str) -> str:
    if _MALFORMED_ESCAPE.search(value):
        raise URISyntaxError("malformed percent escape")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise URISyntaxError("percent escape is not valid UTF-8") from exc


@dataclass(frozen=True)
class MangleableURI:
    """A URI reference split into the parts the mangling transform works on.

    ``raw_path`` keeps its percent escapes; :attr:`decoded_path` is the decoded
    view. Scheme, authority, query and fragment are always kept raw.
    """

    scheme: str
    authority: str
    raw_path: str
    query: str
    fragment: str
    opaque: bool = False

    @classmethod
    def parse(cls, value: str) -> MangleableURI:
        """Split *value* into its components.

        Raises:
            URISyntaxError: If *value* contains characters that are never legal
                in a URI, more than one ``#``, or a malformed percent escape.
        """
        if _ILLEGAL_URI_CHARS.search(value):
            raise URISyntaxError("illegal character in URI")
        if value.count("#") > 1:
            raise URISyntaxError("more than one fragment delimiter")
        if _MALFORMED_ESCAPE.search(value):
            raise URISyntaxError("malformed percent escape")
        try:
            parts = urlsplit(value)
        except ValueError as exc:
            raise URISyntaxError("unparseable URI") from exc
        # "mailto:x@y" style references have no hierarchical path to mangle
        opaque = bool(parts.scheme) and not value[len(parts.scheme) + 1 :].startswith("/")
        return cls(
            # urlsplit lowercases the scheme; keep it as written
            scheme=value[: len(parts.scheme)],
            authority=parts.netloc,
            raw_path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
            opaque=opaque,
        )

    @property
    def decoded_path(self) -> str:
        return _percent_decode(self.raw_path)

    def with_raw_path(self, raw_path: str) -> MangleableURI:
        return replace(self, raw_path=raw_path)

    def to_string(self) -> str:
        """Reassemble the URI with a re-encoded path.

        The scheme and authority are emitted only when both are present; an
        empty query or fragment is dropped together with its delimiter.
        """
        out = []
        if self.scheme and self.authority:
            out.append(f"{self.scheme}://{self.authority}")
        path = quote(self.decoded_path, safe=_PATH_SAFE)
        if path:
            out.append(path)
        if self.query:
            out.append(f"?{self.query}")
        if self.fragment:
            out.append(f"#{self.fragment}")
        return "".join(out)


def mangle_namespaces(value: str, grammar: XSSGrammar) -> str:
    """Rewrite every ``/<ns>:`` path segment prefix of *value* to ``/_<ns>_``.

    ``/jcr:content/par.html`` becomes ``/_jcr_content/par.html``. Opaque URIs
    and paths without a colon are returned unchanged.

    Raises:
        URISyntaxError: If *value* is not a valid URI reference.
    """
    uri = MangleableURI.parse(value)
    if uri.opaque or ":" not in uri.raw_path:
        return value
    mangled = grammar.namespace_segment.sub(r"/_\1_", uri.raw_path)
    return uri.with_raw_path(mangled).to_string()

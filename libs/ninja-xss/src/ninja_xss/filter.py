"""Markup filtering backed by nh3 (ammonia)."""

from __future__ import annotations

import logging
from enum import Enum

import nh3
from markupsafe import escape

from ninja_xss.config import XSSConfig

logger = logging.getLogger(__name__)

# Text content of the probe anchor used by is_valid_href.
_PROBE_TEXT = "x"


class ProtectionContext(str, Enum):
    """Where filtered markup is going to be embedded."""

    HTML_HTML_CONTENT = "htmlToHtmlContent"  # policy-allowed markup inside HTML
    PLAIN_HTML_CONTENT = "plainHtmlContent"  # text only, all markup removed


class NH3ContentFilter:
    """Content filter enforcing the configured tag, attribute and URL-scheme allow-lists."""

    def __init__(self, config: XSSConfig | None = None) -> None:
        config = config or XSSConfig()
        self._tags = set(config.allowed_tags)
        self._attributes = {tag: set(attrs) for tag, attrs in config.allowed_attributes.items()}
        self._url_schemes = {scheme.lower() for scheme in config.allowed_url_schemes}

    def filter(self, context: ProtectionContext, source: str) -> str:
        """Remove everything the policy disallows for *context* from *source*."""
        if context is ProtectionContext.PLAIN_HTML_CONTENT:
            return nh3.clean(source, tags=set(), attributes={})
        return nh3.clean(
            source,
            tags=self._tags,
            attributes=self._attributes,
            url_schemes=self._url_schemes,
        )

    def is_valid_href(self, url: str) -> bool:
        """Return True if nh3 keeps *url* as the target of a link.

        Relative references always pass; absolute ones need an allowed scheme.
        """
        probe = f'<a href="{escape(url)}">{_PROBE_TEXT}</a>'
        cleaned = nh3.clean(
            probe,
            tags={"a"},
            attributes={"a": {"href"}},
            url_schemes=self._url_schemes,
            link_rel=None,
        )
        accepted = 'href="' in cleaned
        if not accepted:
            logger.debug("Link target rejected by URL policy: %r", url)
        return accepted

"""XSS protection configuration loaded from .ninjastack/xss.json."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

_DEFAULT_URL_SCHEMES = ["http", "https", "mailto", "ftp", "tel"]

# Tags kept by filter_html when no explicit allow-list is configured.
_DEFAULT_TAGS = [
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "div",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "hr",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "span",
    "strong",
    "sub",
    "sup",
    "table",
    "tbody",
    "td",
    "th",
    "thead",
    "tr",
    "u",
    "ul",
]

_DEFAULT_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title", "width", "height"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan"],
}


class XSSConfig(BaseModel):
    """Top-level XSS protection configuration.

    The numeric bounds default to the ranges every Ninja Stack service has
    shipped with; override them only for a specific embedding context.
    """

    integer_min: int = -2_000_000_000
    integer_max: int = 2_000_000_000
    long_min: int = -9_000_000_000_000_000_000
    long_max: int = 9_000_000_000_000_000_000
    double_min: float = 0.0
    double_max: float = sys.float_info.max
    dimension_min: int = -10_000
    dimension_max: int = 10_000
    allowed_url_schemes: list[str] = Field(default_factory=lambda: list(_DEFAULT_URL_SCHEMES))
    allowed_tags: list[str] = Field(default_factory=lambda: list(_DEFAULT_TAGS))
    allowed_attributes: dict[str, list[str]] = Field(
        default_factory=lambda: {tag: list(attrs) for tag, attrs in _DEFAULT_ATTRIBUTES.items()}
    )
    json_allow_comments: bool = True

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_bounds(self) -> XSSConfig:
        for name in ("integer", "long", "double", "dimension"):
            low = getattr(self, f"{name}_min")
            high = getattr(self, f"{name}_max")
            if low > high:
                raise ValueError(f"{name}_min ({low}) must not exceed {name}_max ({high})")
        return self

    @model_validator(mode="after")
    def _check_url_schemes(self) -> XSSConfig:
        for scheme in self.allowed_url_schemes:
            if scheme.lower() in ("javascript", "vbscript", "data"):
                logger.warning("allowed_url_schemes contains script-capable scheme '%s'", scheme)
        return self

    @model_validator(mode="after")
    def _check_markup_policy(self) -> XSSConfig:
        # nh3 drops the content of these tags and refuses to also allow them
        content_dropped = {"script", "style"} & {tag.lower() for tag in self.allowed_tags}
        if content_dropped:
            raise ValueError(f"allowed_tags must not contain {sorted(content_dropped)}")
        if "rel" in self.allowed_attributes.get("a", []):
            raise ValueError("allowed_attributes['a'] must not contain 'rel'; link rel is set by the filter")
        return self

    @classmethod
    def from_file(cls, path: str | Path = ".ninjastack/xss.json") -> XSSConfig:
        """Load config from a JSON file, falling back to defaults."""
        p = Path(path)
        if p.exists():
            data: dict[str, Any] = json.loads(p.read_text())
            return cls.model_validate(data)
        return cls()

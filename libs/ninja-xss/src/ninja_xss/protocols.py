"""Collaborator protocols injected into the XSS service.

Each external capability (markup filtering, structural parsing) sits behind a
protocol so the validators can be exercised with fakes and the backing library
can be swapped without touching them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ninja_xss.filter import ProtectionContext


@runtime_checkable
class HrefPolicy(Protocol):
    """Decides whether a URL may be emitted as a link target."""

    def is_valid_href(self, url: str) -> bool:
        """Return True if *url* is acceptable as an ``href`` value."""
        ...


@runtime_checkable
class ContentFilter(HrefPolicy, Protocol):
    """Markup filter that owns the tag/attribute allow-list."""

    def filter(self, context: ProtectionContext, source: str) -> str:
        """Return *source* with everything the policy disallows removed."""
        ...


@runtime_checkable
class JSONParser(Protocol):
    """Structural JSON parser used as a pass/fail oracle.

    Implementations must be safe to share between threads.
    """

    def parse_object(self, text: str) -> dict[str, Any]:
        """Parse *text* as a JSON object or raise."""
        ...

    def parse_array(self, text: str) -> list[Any]:
        """Parse *text* as a JSON array or raise."""
        ...

    def serialize(self, value: dict[str, Any] | list[Any]) -> str:
        """Serialize a parsed structure back to JSON text."""
        ...


@runtime_checkable
class XMLParser(Protocol):
    """Well-formedness checker that never resolves external entities."""

    def check_well_formed(self, text: str) -> None:
        """Raise if *text* is not a well-formed XML document."""
        ...

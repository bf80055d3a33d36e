"""Error types for the XSS protection layer.

Validators raise these internally; :class:`~ninja_xss.api.XSSAPI` catches them at
its boundary and resolves every failure to the caller's default so that callers
never see an exception.
"""

from __future__ import annotations


class XSSError(Exception):
    """Base exception for all XSS-layer errors."""


class InvalidInputError(XSSError, ValueError):
    """Raised when an input string does not satisfy a validation grammar.

    Attributes:
        context: What was being validated (e.g. ``"integer"``, ``"href"``).
        detail: A description of the failure that never echoes the raw input.
    """

    def __init__(self, context: str, detail: str, cause: Exception | None = None) -> None:
        self.context = context
        self.detail = detail
        super().__init__(f"[{context}] {detail}")
        if cause is not None:
            self.__cause__ = cause


class URISyntaxError(InvalidInputError):
    """Raised when a string cannot be parsed as a URI reference."""

    def __init__(self, detail: str, cause: Exception | None = None) -> None:
        super().__init__("uri", detail, cause=cause)

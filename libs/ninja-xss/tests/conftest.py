"""Shared fixtures for ninja-xss tests."""

from __future__ import annotations

import pytest
from ninja_xss.api import XSSAPI, initialize
from ninja_xss.filter import ProtectionContext
from ninja_xss.grammar import XSSGrammar, compile_grammar


class AllowAllFilter:
    """Content filter fake that accepts every link and leaves markup untouched."""

    def __init__(self) -> None:
        self.checked: list[str] = []

    def is_valid_href(self, url: str) -> bool:
        self.checked.append(url)
        return True

    def filter(self, context: ProtectionContext, source: str) -> str:
        return source


class RejectAllFilter(AllowAllFilter):
    """Content filter fake that rejects every link and strips everything."""

    def is_valid_href(self, url: str) -> bool:
        self.checked.append(url)
        return False

    def filter(self, context: ProtectionContext, source: str) -> str:
        return ""


class BrokenFilter:
    """Content filter fake whose every call fails."""

    def is_valid_href(self, url: str) -> bool:
        raise RuntimeError("policy unavailable")

    def filter(self, context: ProtectionContext, source: str) -> str:
        raise RuntimeError("policy unavailable")


@pytest.fixture(scope="session")
def grammar() -> XSSGrammar:
    return compile_grammar()


@pytest.fixture()
def xss_api() -> XSSAPI:
    """Service wired with the real nh3 filter and parsers."""
    return XSSAPI()


@pytest.fixture()
def allow_all_filter() -> AllowAllFilter:
    return AllowAllFilter()


@pytest.fixture()
def permissive_api(allow_all_filter: AllowAllFilter) -> XSSAPI:
    """Service whose link policy accepts everything, to observe the URL transform alone."""
    return XSSAPI(initialize(content_filter=allow_all_filter))


@pytest.fixture()
def reject_all_filter() -> RejectAllFilter:
    return RejectAllFilter()


@pytest.fixture()
def strict_api(reject_all_filter: RejectAllFilter) -> XSSAPI:
    return XSSAPI(initialize(content_filter=reject_all_filter))


@pytest.fixture()
def broken_filter_api() -> XSSAPI:
    return XSSAPI(initialize(content_filter=BrokenFilter()))

"""Tests for XSSAPI.get_valid_href."""

from __future__ import annotations

import pytest
from ninja_xss.api import XSSAPI

_UNSAFE = set("\"'<>` ")


class TestGetValidHrefWithNH3:
    @pytest.mark.parametrize(
        "value",
        ["javascript:alert(1)", "JavaScript:alert(1)", "vbscript:msgbox(1)", "data:text/html;base64,PHNjcmlwdD4="],
    )
    def test_script_schemes_rejected(self, xss_api: XSSAPI, value: str) -> None:
        assert xss_api.get_valid_href(value) == ""

    def test_relative_namespaced_path(self, xss_api: XSSAPI) -> None:
        assert xss_api.get_valid_href("/jcr:content/foo.html") == "/_jcr_content/foo.html"

    def test_space_percent_encoded(self, xss_api: XSSAPI) -> None:
        assert xss_api.get_valid_href("http://example.com/a b") == "http://example.com/a%20b"

    def test_absolute_namespaced_url(self, xss_api: XSSAPI) -> None:
        value = "http://example.com/content/jcr:content/par.html?x=1#top"
        assert xss_api.get_valid_href(value) == "http://example.com/content/_jcr_content/par.html?x=1#top"

    @pytest.mark.parametrize("value", ["https://example.com/", "mailto:someone@example.com", "/a/b.html", "page.html"])
    def test_allowed_targets_pass_through(self, xss_api: XSSAPI, value: str) -> None:
        assert xss_api.get_valid_href(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            '"><script>alert(1)</script>',
            "' onmouseover='alert(1)",
            "/jcr:content/%27onmouseover=alert(1)",
            "/jcr:content/%22%3E%3Cscript%3E",
            "java\tscript:alert(1)",
            "`x`",
            "/a b/jcr:c d",
        ],
    )
    def test_output_never_breaks_out_of_attribute(self, xss_api: XSSAPI, value: str) -> None:
        result = xss_api.get_valid_href(value)
        assert not (_UNSAFE & set(result))

    def test_empty_and_none(self, xss_api: XSSAPI) -> None:
        assert xss_api.get_valid_href("") == ""
        assert xss_api.get_valid_href(None) == ""


class TestGetValidHrefTransform:
    def test_policy_sees_mangled_value(self, permissive_api: XSSAPI, allow_all_filter) -> None:
        assert permissive_api.get_valid_href("http:///jcr:content/x") == "/_jcr_content/x"
        assert allow_all_filter.checked == ["/_jcr_content/x"]

    def test_scheme_case_survives(self, permissive_api: XSSAPI) -> None:
        assert permissive_api.get_valid_href("HTTPS://example.com/jcr:content") == "HTTPS://example.com/_jcr_content"

    def test_scheme_relative_loses_authority(self, permissive_api: XSSAPI) -> None:
        assert permissive_api.get_valid_href("//host/jcr:content") == "/_jcr_content"

    def test_quote_escape_survives_mangling(self, permissive_api: XSSAPI) -> None:
        assert permissive_api.get_valid_href("/jcr:content/%27x") == "/_jcr_content/%27x"

    def test_utf8_escape_preserved(self, permissive_api: XSSAPI) -> None:
        assert permissive_api.get_valid_href("/jcr:content/%C3%A9") == "/_jcr_content/%C3%A9"

    def test_malformed_uri_resolves_to_empty(self, permissive_api: XSSAPI, allow_all_filter) -> None:
        assert permissive_api.get_valid_href("/jcr:content/%zz") == ""
        assert allow_all_filter.checked == []

    def test_rejected_by_policy(self, strict_api: XSSAPI) -> None:
        assert strict_api.get_valid_href("/foo") == ""

    def test_policy_failure_resolves_to_empty(
        self, broken_filter_api: XSSAPI, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("WARNING", logger="ninja_xss.api"):
            assert broken_filter_api.get_valid_href("/foo") == ""
        assert "Unable to validate URL: RuntimeError" in caplog.text

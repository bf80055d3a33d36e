"""Tests for XSSConfig loading and validation."""

import json
import sys

import pytest
from ninja_xss.api import XSSAPI, initialize
from ninja_xss.config import XSSConfig
from pydantic import ValidationError


def test_xss_config_defaults():
    cfg = XSSConfig()
    assert cfg.integer_min == -2_000_000_000
    assert cfg.integer_max == 2_000_000_000
    assert cfg.long_max == 9_000_000_000_000_000_000
    assert cfg.double_min == 0.0
    assert cfg.double_max == sys.float_info.max
    assert cfg.dimension_min == -10_000
    assert cfg.dimension_max == 10_000
    assert "https" in cfg.allowed_url_schemes
    assert "javascript" not in cfg.allowed_url_schemes
    assert cfg.json_allow_comments is True


def test_xss_config_from_file(tmp_path):
    path = tmp_path / "xss.json"
    path.write_text(json.dumps({"dimension_max": 500, "allowed_url_schemes": ["https"], "json_allow_comments": False}))
    cfg = XSSConfig.from_file(path)

    assert cfg.dimension_max == 500
    assert cfg.allowed_url_schemes == ["https"]
    assert cfg.json_allow_comments is False


def test_xss_config_from_missing_file():
    cfg = XSSConfig.from_file("/nonexistent/xss.json")
    assert cfg.integer_max == 2_000_000_000


def test_xss_config_file_drives_service(tmp_path):
    path = tmp_path / "xss.json"
    path.write_text(json.dumps({"dimension_max": 500}))
    api = XSSAPI(initialize(XSSConfig.from_file(path)))
    assert api.get_valid_dimension("500", "d") == "500"
    assert api.get_valid_dimension("501", "d") == "d"


@pytest.mark.parametrize("name", ["integer", "long", "double", "dimension"])
def test_xss_config_inverted_bounds(name):
    with pytest.raises(ValidationError, match=f"{name}_min"):
        XSSConfig(**{f"{name}_min": 10, f"{name}_max": 1})


@pytest.mark.parametrize("tag", ["script", "STYLE"])
def test_xss_config_rejects_content_dropped_tags(tag):
    with pytest.raises(ValidationError, match="allowed_tags"):
        XSSConfig(allowed_tags=["b", tag])


def test_xss_config_rejects_link_rel_attribute():
    with pytest.raises(ValidationError, match="rel"):
        XSSConfig(allowed_attributes={"a": ["href", "rel"]})


def test_xss_config_warns_on_script_scheme(caplog):
    with caplog.at_level("WARNING", logger="ninja_xss.config"):
        XSSConfig(allowed_url_schemes=["https", "javascript"])
    assert "script-capable scheme 'javascript'" in caplog.text


def test_xss_config_is_frozen():
    cfg = XSSConfig()
    with pytest.raises(ValidationError):
        cfg.integer_max = 1

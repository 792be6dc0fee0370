"""Unit tests for language code helpers."""

from __future__ import annotations

import src.language_codes as lc
from src.config import FLAG_TO_LANG


def test_base_code_strips_region_and_lowercases():
    assert lc.base_code("PT-PT") == "pt"
    assert lc.base_code("ZH-TW") == "zh"
    assert lc.base_code("EN-US") == "en"
    assert lc.base_code("FR") == "fr"
    assert lc.base_code("") == ""


def test_get_language_name():
    assert lc.get_language_name("EN-US") == "English (United States)"
    assert lc.get_language_name("ko") == "Korean"
    assert lc.get_language_name("PT-AO") == "Portuguese"
    assert lc.get_language_name("xx") is None


def test_describe_flags_keeps_mapping_order():
    described = lc.describe_flags(FLAG_TO_LANG)
    assert [item["flag"] for item in described] == list(FLAG_TO_LANG)
    assert described[0] == {"flag": "🇺🇸", "code": "EN-US", "name": "English (United States)"}

"""Pytest fixtures for the translation bot tests."""

from __future__ import annotations

import os

# Keep test runs from writing logs/app.log
os.environ.setdefault("LOG_MODE", "off")

import pytest

from src.config import TranslatorConfig
from src.translation import reset_translation_service


@pytest.fixture
def translator_config() -> TranslatorConfig:
    return TranslatorConfig(
        deepl_key="test-key",
        libretranslate_urls=("https://libre-a.test", "https://libre-b.test", "https://libre-c.test"),
        timeout=2.0,
        pool_timeout=2.0,
    )


@pytest.fixture(autouse=True)
def clean_translation_service():
    reset_translation_service()
    yield
    reset_translation_service()

"""Tests for the provider fallback chain."""

from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest

from src.config import DEEPL_SUPPORTED_TARGETS
from src.providers import DeepLProvider, GooglePublicProvider, LibreTranslateProvider
from src.translation import TranslationService, get_translation_service, reset_translation_service, translate
from src.translation.service import build_providers
from tests.fakes import FakeProvider, Router, failing


def chain(primary, pooled, last_resort) -> TranslationService:
    return TranslationService(providers=[primary, pooled, last_resort])


def test_primary_success_skips_lower_tiers():
    primary = FakeProvider("deepl", text="Bonjour", use_target_code=True)
    pooled = FakeProvider("libretranslate", text="unused")
    last_resort = FakeProvider("google", text="unused")

    outcome = chain(primary, pooled, last_resort).translate_detailed("Hello", "FR")

    assert outcome.text == "Bonjour"
    assert outcome.provider == "deepl"
    assert outcome.attempts == ("deepl",)
    assert len(primary.calls) == 1
    assert pooled.calls == []
    assert last_resort.calls == []


def test_primary_failure_falls_back_with_base_code():
    primary = failing("deepl")
    primary.use_target_code = True
    pooled = FakeProvider("libretranslate", text="Olá")
    last_resort = FakeProvider("google")

    result = chain(primary, pooled, last_resort).translate("Hello", "PT-PT")

    assert result == "Olá"
    assert primary.calls == [("Hello", "PT-PT")]
    assert pooled.calls == [("Hello", "pt")]
    assert last_resort.calls == []


def test_ineligible_primary_is_not_attempted():
    primary = FakeProvider("deepl", text="unused", eligible=False)
    pooled = FakeProvider("libretranslate", text="你好")
    last_resort = FakeProvider("google")

    outcome = chain(primary, pooled, last_resort).translate_detailed("Hello", "ZH-TW")

    assert outcome.text == "你好"
    assert outcome.attempts == ("libretranslate",)
    assert primary.calls == []
    assert pooled.calls == [("Hello", "zh")]


def test_last_resort_used_when_pool_fails():
    service = chain(failing("deepl"), failing("libretranslate"), FakeProvider("google", text="Cześć"))

    outcome = service.translate_detailed("Hello", "PL")

    assert outcome.text == "Cześć"
    assert outcome.provider == "google"
    assert outcome.attempts == ("deepl", "libretranslate", "google")


@pytest.mark.parametrize(
    "text, code, expected",
    [
        ("Hello", "EN-US", "Hello"),
        ("  ありがとう  ", "FR", "thank you"),
        ("", "ES", ""),
        (None, "ES", ""),
        ("Hello", "", "Hello"),
        ("Hello", None, "Hello"),
    ],
)
def test_total_failure_returns_normalized_text(text, code, expected):
    service = chain(failing("deepl"), failing("libretranslate"), failing("google"))

    outcome = service.translate_detailed(text, code)

    assert outcome.text == expected
    assert outcome.provider == "none"
    assert outcome.degraded


def test_unexpected_provider_exception_is_absorbed():
    service = chain(
        FakeProvider("deepl", error=RuntimeError("bug")),
        FakeProvider("libretranslate", error=KeyError("translatedText")),
        FakeProvider("google", text="Hola"),
    )
    assert service.translate("Hello", "ES") == "Hola"


def test_degraded_result_stops_the_chain():
    primary = FakeProvider("deepl", degraded=True)
    pooled = FakeProvider("libretranslate", text="unused")
    last_resort = FakeProvider("google", text="unused")

    outcome = chain(primary, pooled, last_resort).translate_detailed("ありがとう", "DE")

    assert outcome.text == "thank you"
    assert outcome.degraded
    assert outcome.provider == "deepl"
    assert pooled.calls == []
    assert last_resort.calls == []


def test_default_chain_order(translator_config):
    providers = build_providers(translator_config)
    assert [type(p) for p in providers] == [DeepLProvider, LibreTranslateProvider, GooglePublicProvider]
    assert providers[1].endpoints == translator_config.libretranslate_urls


# --- Full chain over mocked HTTP ---------------------------------------------


def http_chain(router: Router, deepl_key="test-key") -> TranslationService:
    transport = router.transport
    return TranslationService(providers=[
        DeepLProvider(deepl_key, DEEPL_SUPPORTED_TARGETS, api_url="https://deepl.test/v2/translate", transport=transport),
        LibreTranslateProvider(["https://libre-a.test", "https://libre-b.test"], transport=transport),
        GooglePublicProvider(api_url="https://google.test/translate_a/single", transport=transport),
    ])


def test_thank_you_scenario_over_http():
    seen = {}

    def deepl_handler(request):
        seen["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={"translations": [{"detected_source_language": "EN", "text": "Thank you!"}]})

    router = Router({
        "deepl.test": deepl_handler,
        "libre-a.test": lambda request: httpx.Response(200, json={"translatedText": "unused"}),
        "google.test": lambda request: httpx.Response(200, json=[[["unused"]]]),
    })

    assert http_chain(router).translate("ありがとう", "EN-US") == "Thank you!"
    assert seen["form"] == {"text": ["thank you"], "target_lang": ["EN-US"]}
    assert router.hits == {"deepl.test": 1, "libre-a.test": 0, "google.test": 0}


def test_traditional_chinese_skips_deepl_over_http():
    seen = {}

    def libre_handler(request):
        seen["body"] = request.content
        return httpx.Response(200, json={"translatedText": "你好"})

    router = Router({
        "deepl.test": lambda request: httpx.Response(200, json={"translations": [{"text": "unused"}]}),
        "libre-a.test": libre_handler,
    })

    assert http_chain(router).translate("Hello", "ZH-TW") == "你好"
    assert router.hits["deepl.test"] == 0
    assert json.loads(seen["body"])["target"] == "zh"


def test_everything_down_over_http():
    def down(request):
        raise httpx.ConnectError("refused", request=request)

    router = Router({
        "deepl.test": lambda request: httpx.Response(500),
        "libre-a.test": down,
        "libre-b.test": lambda request: httpx.Response(502, text="Bad Gateway"),
        "google.test": lambda request: httpx.Response(503),
    })

    assert http_chain(router).translate(" dankie ", "EN-GB") == "thank you"
    assert router.hits == {"deepl.test": 1, "libre-a.test": 1, "libre-b.test": 1, "google.test": 1}


def test_no_deepl_key_starts_at_pool():
    router = Router({
        "deepl.test": lambda request: httpx.Response(200, json={"translations": [{"text": "unused"}]}),
        "libre-a.test": lambda request: httpx.Response(200, json={"translatedText": "Hola"}),
    })

    assert http_chain(router, deepl_key=None).translate("Hello", "ES") == "Hola"
    assert router.hits["deepl.test"] == 0


def test_non_string_payload_still_returns_text():
    router = Router({
        "deepl.test": lambda request: httpx.Response(200, json={"translations": [{"text": 5}]}),
    })

    outcome = http_chain(router).translate_detailed("Hello", "FR")

    assert outcome.text == "Hello"
    assert isinstance(outcome.text, str)
    assert outcome.degraded


# --- Module-level surface ----------------------------------------------------


def test_translate_uses_process_service():
    service = chain(FakeProvider("deepl", text="Hej"), FakeProvider("libretranslate"), FakeProvider("google"))
    reset_translation_service(service)

    assert get_translation_service() is service
    assert translate("Hello", "SV") == "Hej"

"""DeepL API provider (first tier)."""

from typing import Any, FrozenSet, Optional

import httpx

from src.logger import get_logger
from src.providers.base import ProviderResult, TranslationProvider
from src.providers.exceptions import ProviderError
from src.providers.http import bounded_request, parse_json

logger = get_logger(__name__)


class DeepLProvider(TranslationProvider):
    """Form-encoded POST to the DeepL translate endpoint, authenticated by API key."""

    name = "deepl"

    def __init__(
        self,
        api_key: Optional[str],
        supported_targets: FrozenSet[str],
        api_url: str = "https://api-free.deepl.com/v2/translate",
        timeout: Any = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.supported_targets = supported_targets
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    def is_eligible(self, target_code: str) -> bool:
        return bool(self.api_key) and (target_code or '').upper() in self.supported_targets

    def code_for(self, target_code: str, base_code: str) -> str:
        return target_code

    def translate(self, text: str, code: str) -> ProviderResult:
        if not self.api_key:
            raise ProviderError("DeepL API key not configured", provider=self.name, code="not_configured")

        response = bounded_request(
            "POST",
            self.api_url,
            provider=self.name,
            label="DeepL",
            timeout=self.timeout,
            transport=self.transport,
            headers={"Authorization": f"DeepL-Auth-Key {self.api_key}"},
            data={"text": text, "target_lang": code},
        )
        result = parse_json(response, provider=self.name, label="DeepL", url=self.api_url)

        translated = None
        if isinstance(result, dict):
            translations = result.get('translations')
            if isinstance(translations, list) and translations and isinstance(translations[0], dict):
                translated = translations[0].get('text')

        if not isinstance(translated, str) or not translated:
            logger.warning("DeepL response had no usable translations[0].text, returning input text")
        return self._result(translated, text)

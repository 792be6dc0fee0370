"""
LibreTranslate provider (second tier).

Endpoints in the pool are interchangeable LibreTranslate instances. They are
tried one at a time, in configured order, each with its own timeout; the
first usable answer wins.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from src.logger import get_logger
from src.providers.base import ProviderResult, TranslationProvider
from src.providers.exceptions import ProviderError
from src.providers.http import bounded_request, body_excerpt, parse_json

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "https://libretranslate.de"


class LibreTranslateProvider(TranslationProvider):
    """JSON POST to `<endpoint>/translate`, falling through the endpoint pool."""

    name = "libretranslate"

    def __init__(
        self,
        endpoints: Sequence[str],
        timeout: Any = 8.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.endpoints = tuple(endpoints) or (DEFAULT_ENDPOINT,)
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def translate_at(self, endpoint: str, text: str, code: str) -> ProviderResult:
        """
        Translate with a single endpoint.

        Raises:
            ProviderError: On timeout, transport failure, non-2xx status,
                non-JSON content type or an unparsable body
        """
        url = f"{endpoint.rstrip('/')}/translate"
        label = f"Libre @ {endpoint}"

        headers = {"Content-Type": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        response = bounded_request(
            "POST",
            url,
            provider=self.name,
            label=label,
            timeout=self.timeout,
            transport=self.transport,
            excerpt_limit=120,
            headers=headers,
            json={"q": text, "source": "auto", "target": code, "format": "text"},
        )

        # Misconfigured instances answer 200 with an HTML page
        content_type = response.headers.get('content-type', '').lower()
        if 'application/json' not in content_type:
            raise ProviderError(
                f"{label} invalid content-type ({content_type}) - {body_excerpt(response, 80)}",
                provider=self.name,
                code="invalid_content_type",
                details={"url": url, "content_type": content_type},
            )

        result = parse_json(response, provider=self.name, label=label, url=url)

        translated = result.get('translatedText') if isinstance(result, dict) else None
        if not isinstance(translated, str) or not translated:
            logger.warning(f"{label}: response had no usable translatedText, returning input text")
        return self._result(translated, text)

    def translate(self, text: str, code: str) -> ProviderResult:
        attempts: List[Dict[str, str]] = []
        last_error: Optional[ProviderError] = None

        for endpoint in self.endpoints:
            try:
                result = self.translate_at(endpoint, text, code)
            except ProviderError as e:
                last_error = e
                attempts.append({"endpoint": endpoint, "error": str(e)})
                logger.warning(f"LibreTranslate failed at {endpoint}: {e}")
                continue

            if attempts:
                logger.info(f"LibreTranslate succeeded at {endpoint} after {len(attempts)} failed endpoint(s)")
            return result

        if last_error is None:
            last_error = ProviderError("No LibreTranslate endpoint available", provider=self.name, code="pool_exhausted")
        last_error.details["attempts"] = attempts
        raise last_error

"""Unofficial public Google translate endpoint (last tier)."""

from typing import Any, List, Optional

import httpx

from src.logger import get_logger
from src.providers.base import ProviderResult, TranslationProvider
from src.providers.http import bounded_request, parse_json

logger = get_logger(__name__)


def join_segments(payload: Any) -> str:
    """
    Rebuild the translation from the nested segment array.

    The response looks like [[["Hola", "Hello", ...], ["mundo", "world", ...]], ...];
    the first element of each segment in the first item is translated text.

    Examples:
        >>> join_segments([[["Hola", "Hello"], [None, "x"], ["mundo", "world"]]])
        'Hola mundo'
        >>> join_segments(None)
        ''
    """
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], list):
        return ''

    chunks: List[str] = []
    for segment in payload[0]:
        if isinstance(segment, list) and segment and segment[0]:
            chunks.append(str(segment[0]))
    return ' '.join(chunks)


class GooglePublicProvider(TranslationProvider):
    """Unauthenticated GET with the query and target in the URL."""

    name = "google"

    def __init__(
        self,
        api_url: str = "https://translate.googleapis.com/translate_a/single",
        timeout: Any = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    def translate(self, text: str, code: str) -> ProviderResult:
        response = bounded_request(
            "GET",
            self.api_url,
            provider=self.name,
            label="Google",
            timeout=self.timeout,
            transport=self.transport,
            params={"client": "gtx", "sl": "auto", "tl": code, "dt": "t", "q": text},
        )
        translated = join_segments(parse_json(response, provider=self.name, label="Google", url=self.api_url))

        if not translated:
            logger.warning("Google response had no translated segments, returning input text")
        return self._result(translated, text)

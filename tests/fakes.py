"""Test doubles for providers and HTTP endpoints."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import httpx

from src.providers import ProviderError, ProviderResult, TranslationProvider


class FakeProvider(TranslationProvider):
    """Provider double that records calls and returns a canned result or error."""

    def __init__(
        self,
        name: str,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        eligible: bool = True,
        degraded: bool = False,
        use_target_code: bool = False,
    ):
        self.name = name
        self.text = text
        self.error = error
        self.eligible = eligible
        self.degraded = degraded
        self.use_target_code = use_target_code
        self.calls: List[tuple] = []

    def is_eligible(self, target_code: str) -> bool:
        return self.eligible

    def code_for(self, target_code: str, base_code: str) -> str:
        return target_code if self.use_target_code else base_code

    def translate(self, text: str, code: str) -> ProviderResult:
        self.calls.append((text, code))
        if self.error is not None:
            raise self.error
        return ProviderResult(text=self.text if self.text is not None else text, provider=self.name, degraded=self.degraded)


def failing(name: str) -> FakeProvider:
    return FakeProvider(name, error=ProviderError(f"{name} 500", provider=name, code="http_status"))


class Router:
    """Dispatch MockTransport requests to per-host handlers and count hits."""

    def __init__(self, routes: Dict[str, Callable[[httpx.Request], httpx.Response]]):
        self.routes = routes
        self.hits: Dict[str, int] = {host: 0 for host in routes}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.requests.append(request)
        if host not in self.routes:
            return httpx.Response(404, text="no route")
        self.hits[host] += 1
        return self.routes[host](request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

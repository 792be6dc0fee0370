"""
Bounded HTTP calls shared by every provider.

Each call opens its own httpx client, applies a timeout to every phase of
the request plus an overall deadline for the complete response, and
converts transport failures and non-2xx responses into ProviderError so
callers only ever handle one exception type.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Optional

import httpx

from src.logger import get_logger
from src.providers.exceptions import ProviderError

logger = get_logger(__name__)


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (applied to connect, read, write and
            pool) or a dict with connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 10.0),
            write=timeout_config.get('write', 10.0),
            read=timeout_config.get('read', 10.0),
            pool=timeout_config.get('pool', 10.0),
        )
    timeout_value = float(timeout_config) if timeout_config else 10.0
    return httpx.Timeout(timeout_value)


def get_deadline(timeout_config: Any) -> float:
    """
    Seconds allowed for the whole request, from sending to the last body byte.

    A number is used as is. A dict may carry a 'total' key; otherwise its
    'read' value (default 10) is used.
    """
    if isinstance(timeout_config, dict):
        return float(timeout_config.get('total', timeout_config.get('read', 10.0)))
    return float(timeout_config) if timeout_config else 10.0


def body_excerpt(response: httpx.Response, limit: int) -> str:
    """Return the first `limit` characters of a response body, or '' if unreadable."""
    try:
        return response.text[:limit]
    except Exception:
        return ''


def bounded_request(
    method: str,
    url: str,
    *,
    provider: str,
    timeout: Any,
    transport: Optional[httpx.BaseTransport] = None,
    label: Optional[str] = None,
    excerpt_limit: int = 0,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send one request with a bounded timeout.

    Args:
        method: HTTP method
        url: Request URL
        provider: Provider name used in errors and logs
        timeout: Timeout configuration, see get_httpx_timeout() and get_deadline()
        transport: Optional httpx transport (tests inject httpx.MockTransport)
        label: Short name for error messages, defaults to the provider name
        excerpt_limit: Characters of the body to include in status errors
        **kwargs: Passed to httpx.Client.request (data, json, params, headers)

    Returns:
        The successful (2xx) response with its body already read

    Raises:
        ProviderError: On timeout, transport failure or non-2xx status
    """
    label = label or provider
    deadline = get_deadline(timeout)
    logger.debug(f"{label}: {method} {url} (deadline {deadline}s)")

    # httpx timeouts bound each phase only; the deadline bounds the whole exchange
    client = httpx.Client(timeout=get_httpx_timeout(timeout), transport=transport)
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{provider}-http")
    try:
        future = executor.submit(client.request, method, url, **kwargs)
        response = future.result(timeout=deadline)
    except FutureTimeoutError as e:
        raise ProviderError(
            f"{label} request timeout",
            provider=provider,
            code="timeout",
            details={"url": url, "error": f"no complete response within {deadline}s"},
        ) from e
    except httpx.TimeoutException as e:
        raise ProviderError(
            f"{label} request timeout",
            provider=provider,
            code="timeout",
            details={"url": url, "error": str(e)},
        ) from e
    except httpx.HTTPError as e:
        raise ProviderError(
            f"{label} request failed: {e}",
            provider=provider,
            code="transport",
            details={"url": url},
        ) from e
    finally:
        # Closing the client drops the socket of a request still in flight
        client.close()
        executor.shutdown(wait=False)

    if not response.is_success:
        excerpt = body_excerpt(response, excerpt_limit) if excerpt_limit else ''
        message = f"{label} {response.status_code}"
        if excerpt:
            message = f"{message} - {excerpt}"
        raise ProviderError(
            message,
            provider=provider,
            code="http_status",
            details={"url": url, "status_code": response.status_code, "body": excerpt},
        )

    return response


def parse_json(
    response: httpx.Response,
    *,
    provider: str,
    label: Optional[str] = None,
    url: Optional[str] = None,
    excerpt_limit: int = 120,
) -> Any:
    """Decode a JSON body, raising ProviderError if it is not valid JSON."""
    label = label or provider
    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(
            f"{label} JSON parse fail - {body_excerpt(response, excerpt_limit)}",
            provider=provider,
            code="invalid_json",
            details={"url": url},
        ) from e

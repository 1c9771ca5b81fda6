"""Shared async HTTP client.

One ``httpx.AsyncClient`` per process so every tool call reuses the same
connection pool. The timeout comes from settings; there is no other
timeout policy.
"""

import logging
from typing import Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared client, creating it on first use."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            headers={"User-Agent": f"linear-tickets/{settings.app_version}"},
        )
        logger.debug("Created shared HTTP client (timeout=%.1fs)", settings.http_timeout)
    return _http_client


async def close_http_client() -> None:
    """Close the shared client and release its connections."""
    global _http_client
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        logger.debug("Closed shared HTTP client")
    _http_client = None

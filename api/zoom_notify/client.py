"""HTTP client used for all calls to Zoom."""

from typing import AsyncIterator

import httpx
from fastapi import Depends

from zoom_notify.config import Settings, get_settings


def zoom_http_client(timeout: float = 15, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"Accept": "application/json"},
        **kwargs,
    )


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """Per-request client; closed when the request finishes."""
    async with zoom_http_client(timeout=settings.http_timeout) as client:
        yield client

"""Wrapper de httpx.

- Estandariza timeouts y headers para todas las llamadas REST.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` compartido por el gateway.

    Sin timeout salvo que se configure: la cancelación la decide quien llama.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
    )

"""Construcción de `ChargeClient` a partir de `AppSettings`."""

from __future__ import annotations

import httpx

from adapters.charge.client import ChargeClient
from core.config import AppSettings
from core.domain.errors import ConfigurationError


def build_charge_client(
    settings: AppSettings | None = None,
    *,
    http: httpx.AsyncClient | None = None,
) -> ChargeClient:
    settings = settings or AppSettings()
    if not settings.url:
        raise ConfigurationError("CHARGE_URL is not configured")
    return ChargeClient(
        settings.url,
        cookie_file_path=settings.cookie_file_path,
        settings=settings,
        http=http,
    )

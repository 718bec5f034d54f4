"""Endpoint base de Lightning Charge.

Las credenciales embebidas en la URL se eliminan antes de construir cualquier
dirección; la autenticación viaja siempre en el header `Authorization`.
"""

from __future__ import annotations

import httpx

from core.domain.errors import ConfigurationError

_WEBSOCKET_SCHEMES = {"http": "ws", "https": "wss"}


class ChargeEndpoint:
    """URL base normalizada (sin user-info, terminada en `/`)."""

    def __init__(self, url: str | httpx.URL) -> None:
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Invalid Charge URL: {exc}") from exc
        if parsed.scheme not in _WEBSOCKET_SCHEMES or not parsed.host:
            raise ConfigurationError(f"Charge URL must be an absolute http(s) URL, got {url!s}")

        path = parsed.raw_path.split(b"?", 1)[0].decode("ascii")
        if not path.endswith("/"):
            path += "/"
        self._scheme = parsed.scheme
        self._authority = parsed.netloc.decode("ascii")
        self._path = path

    @property
    def base_url(self) -> str:
        return f"{self._scheme}://{self._authority}{self._path}"

    def url_for(self, path: str) -> str:
        """Dirección absoluta para `path`, relativo a la base."""

        return self.base_url + path.lstrip("/")

    def websocket_url(self) -> str:
        """`{ws|wss}://host/<base>/ws`."""

        scheme = _WEBSOCKET_SCHEMES[self._scheme]
        return f"{scheme}://{self._authority}{self._path}ws"

    def __str__(self) -> str:
        return self.base_url

    def __repr__(self) -> str:
        return f"ChargeEndpoint({self.base_url!r})"

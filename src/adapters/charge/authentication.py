"""Estrategias de autenticación contra Lightning Charge.

Ambas variantes producen el token de `Authorization: Basic <token>` sin I/O de
red. La variante de cookie relee el fichero en cada llamada para observar
rotaciones de credenciales en disco.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import unquote

import httpx

from core.domain.errors import ConfigurationError, CredentialReadError


def _encode(raw: str) -> str:
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class ChargeAuthentication(ABC):
    """Credencial inmutable asociada a una instancia de cliente."""

    @abstractmethod
    def token(self) -> str:
        """Token base64 para el esquema Basic."""

    def authorization_header(self) -> str:
        return f"Basic {self.token()}"


class UserPasswordAuthentication(ChargeAuthentication):
    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    @classmethod
    def from_url(cls, url: str | httpx.URL) -> "UserPasswordAuthentication":
        """Extrae `user:password` del user-info de la URL.

        Falla si el segmento falta o no tiene exactamente dos partes.
        """

        try:
            userinfo = httpx.URL(url).userinfo.decode("ascii")
        except (httpx.InvalidURL, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Invalid Charge URL: {exc}") from exc
        if not userinfo:
            raise ConfigurationError("User information not present in uri")
        parts = userinfo.split(":")
        if len(parts) != 2:
            raise ConfigurationError("User information not present in uri")
        return cls(unquote(parts[0]), unquote(parts[1]))

    def token(self) -> str:
        return _encode(f"{self._username}:{self._password}")

    def __repr__(self) -> str:
        return f"UserPasswordAuthentication(username={self._username!r})"


class CookieFileAuthentication(ChargeAuthentication):
    def __init__(self, cookie_file_path: str | Path) -> None:
        self._path = Path(cookie_file_path)

    @property
    def path(self) -> Path:
        return self._path

    def token(self) -> str:
        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CredentialReadError(str(self._path), str(exc)) from exc
        return _encode(content.strip())

    def __repr__(self) -> str:
        return f"CookieFileAuthentication(path={str(self._path)!r})"

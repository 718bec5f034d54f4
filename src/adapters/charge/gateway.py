"""Gateway HTTP autenticado hacia Lightning Charge.

Responsabilidad:
- Construir la URL absoluta a partir del endpoint.
- Adjuntar `Authorization: Basic <token>`, recalculado en cada petición.
- Traducir fallos HTTP a `TransportError`; 404 opcionalmente a `None`.
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from adapters.charge.authentication import ChargeAuthentication
from adapters.charge.endpoint import ChargeEndpoint
from core.domain.errors import TransportError

logger = logging.getLogger(__name__)


class ChargeGateway:
    def __init__(
        self,
        endpoint: ChargeEndpoint,
        authentication: ChargeAuthentication,
        http: httpx.AsyncClient,
    ) -> None:
        self._endpoint = endpoint
        self._authentication = authentication
        self._http = http

    async def send(
        self,
        method: str,
        path: str,
        data: Mapping[str, str] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> httpx.Response | None:
        """Envía la petición y devuelve la respuesta cruda si es 2xx.

        Con `allow_not_found`, un 404 devuelve `None` en lugar de fallar.
        """

        url = self._endpoint.url_for(path)
        headers = {"Authorization": self._authentication.authorization_header()}
        logger.debug("%s %s", method, url)
        try:
            response = await self._http.request(method, url, data=data, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if allow_not_found and response.status_code == httpx.codes.NOT_FOUND:
            return None
        if not response.is_success:
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response

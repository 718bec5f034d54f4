"""Sesión de actualizaciones de facturas (WebSocket `/ws` de Charge).

Modelo:
- Una tarea en segundo plano lee frames y los empuja a una cola acotada.
- Quien consume tira de la cola con `async for` o `wait_invoice()`.
- Cerrar la sesión (o perder la conexión) termina la secuencia. No hay
  reconexión ni buffer de eventos pasados: hace falta un `open_session` nuevo.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Any

from pydantic import ValidationError
from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, InvalidStatus, WebSocketException

from adapters.charge.authentication import ChargeAuthentication
from adapters.charge.endpoint import ChargeEndpoint
from adapters.charge.mapping import to_lightning_invoice
from core.domain.errors import TransportError
from core.domain.models import ChargeInvoice, LightningInvoice

logger = logging.getLogger(__name__)

_END = object()


class ChargeSession:
    """Secuencia perezosa, no reiniciable, de `ChargeInvoice` actualizadas."""

    def __init__(self, socket: Any, *, queue_size: int = 100) -> None:
        self._socket = socket
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=queue_size)
        self._reader: asyncio.Task[None] | None = None
        self._closed = False
        self._exhausted = False

    def start(self) -> None:
        if self._reader is None:
            self._reader = asyncio.create_task(self._read_loop(), name="charge-session-reader")

    @property
    def closed(self) -> bool:
        return self._closed

    async def _read_loop(self) -> None:
        try:
            async for message in self._socket:
                invoice = self._decode(message)
                if invoice is not None:
                    await self._queue.put(invoice)
        except ConnectionClosed as exc:
            logger.warning("Charge websocket connection dropped: %s", exc)
        else:
            logger.debug("Charge websocket closed by server")
        await self._queue.put(_END)

    @staticmethod
    def _decode(message: str | bytes) -> ChargeInvoice | None:
        try:
            return ChargeInvoice.model_validate_json(message)
        except ValidationError as exc:
            logger.warning("Skipping undecodable invoice update: %s", exc)
            return None

    def __aiter__(self) -> "ChargeSession":
        return self

    async def __anext__(self) -> ChargeInvoice:
        if self._closed or self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _END:
            self._exhausted = True
            raise StopAsyncIteration
        return item

    async def wait_invoice(self) -> LightningInvoice | None:
        """Siguiente factura en forma genérica; `None` cuando la sesión terminó."""

        try:
            invoice = await self.__anext__()
        except StopAsyncIteration:
            return None
        return to_lightning_invoice(invoice)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._reader is not None:
            self._reader.cancel()
            with suppress(asyncio.CancelledError):
                await self._reader
        await self._socket.close()

        # Despierta a un consumidor bloqueado en `__anext__`.
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_END)
        logger.debug("Charge session closed")

    async def __aenter__(self) -> "ChargeSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


async def open_session(
    endpoint: ChargeEndpoint,
    authentication: ChargeAuthentication,
    *,
    queue_size: int = 100,
) -> ChargeSession:
    """Abre el WebSocket con `Authorization` fijado antes del handshake."""

    url = endpoint.websocket_url()
    headers = {"Authorization": authentication.authorization_header()}
    try:
        # Sin timeouts propios: la cancelación la decide quien llama.
        socket = await connect(
            url,
            additional_headers=headers,
            open_timeout=None,
            ping_interval=None,
        )
    except InvalidStatus as exc:
        raise TransportError(
            f"Charge websocket handshake rejected with HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
        ) from exc
    except (WebSocketException, OSError) as exc:
        raise TransportError(f"Cannot open Charge websocket {url}: {exc}") from exc

    logger.info("Listening for invoice updates on %s", url)
    session = ChargeSession(socket, queue_size=queue_size)
    session.start()
    return session

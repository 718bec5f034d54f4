"""Contrato genérico de cliente de nodo Lightning.

Cada backend (Charge, c-lightning, LND...) lo implementa de forma
independiente; no hay clase base compartida. Las capacidades que un backend no
soporta deben lanzar `UnsupportedOperation`, nunca degradarse en silencio.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable

from core.domain.models import (
    LightningInvoice,
    LightningNodeInformation,
    NodeInfo,
    OpenChannelRequest,
)


@runtime_checkable
class InvoiceListener(Protocol):
    """Secuencia perezosa, no reiniciable, de facturas actualizadas."""

    async def wait_invoice(self) -> LightningInvoice | None:
        """Espera la siguiente actualización; `None` cuando la sesión terminó."""

        ...

    async def close(self) -> None:
        ...


@runtime_checkable
class LightningClient(Protocol):
    """Operaciones que todo backend debe implementar o rechazar explícitamente."""

    async def create_invoice(
        self,
        amount: int,
        description: str | None,
        expiry: timedelta,
    ) -> LightningInvoice:
        ...

    async def get_invoice(self, invoice_id: str) -> LightningInvoice | None:
        ...

    async def get_info(self) -> LightningNodeInformation:
        ...

    async def listen(self) -> InvoiceListener:
        ...

    async def pay(self, bolt11: str) -> object:
        ...

    async def open_channel(self, request: OpenChannelRequest) -> object:
        ...

    async def get_deposit_address(self) -> str:
        ...

    async def connect_to(self, node_info: NodeInfo) -> None:
        ...

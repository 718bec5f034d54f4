"""Ciclo de vida de facturas sobre la API REST de Charge.

Sin reintentos: cualquier `TransportError` del gateway se propaga tal cual.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from adapters.charge.gateway import ChargeGateway
from adapters.charge.mapping import to_invoice_form, to_lightning_invoice
from core.domain.errors import TransportError
from core.domain.models import (
    ChargeInvoice,
    CreateInvoiceResponse,
    GetInfoResponse,
    InvoiceRequest,
    LightningInvoice,
    LightningInvoiceStatus,
)

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _decode(response: httpx.Response, model: type[_ModelT]) -> _ModelT:
    try:
        return model.model_validate_json(response.content)
    except ValidationError as exc:
        raise TransportError(
            f"Unexpected {model.__name__} payload from {response.request.url}: {exc}",
            status_code=response.status_code,
        ) from exc


class ChargeInvoiceClient:
    def __init__(self, gateway: ChargeGateway) -> None:
        self._gateway = gateway

    async def create_charge_invoice(self, request: InvoiceRequest) -> CreateInvoiceResponse:
        response = await self._gateway.send("POST", "invoice", data=to_invoice_form(request))
        assert response is not None
        created = _decode(response, CreateInvoiceResponse)
        logger.info("Created Charge invoice %s (%s msat)", created.id, request.amount)
        return created

    async def create_invoice(self, request: InvoiceRequest) -> LightningInvoice:
        """Crea la factura y la sintetiza en forma genérica.

        La respuesta de creación no trae un estado fiable: el estado es siempre
        UNPAID y `expires_at` se calcula en cliente como ahora + expiry.
        """

        created = await self.create_charge_invoice(request)
        return LightningInvoice(
            id=created.id,
            amount=request.amount,
            bolt11=created.payreq,
            status=LightningInvoiceStatus.UNPAID,
            expires_at=datetime.now(timezone.utc) + request.expiry,
        )

    async def get_charge_invoice(self, invoice_id: str) -> ChargeInvoice | None:
        response = await self._gateway.send(
            "GET",
            f"invoice/{quote(invoice_id, safe='')}",
            allow_not_found=True,
        )
        if response is None:
            logger.debug("Charge invoice %s not found", invoice_id)
            return None
        return _decode(response, ChargeInvoice)

    async def get_invoice(self, invoice_id: str) -> LightningInvoice | None:
        invoice = await self.get_charge_invoice(invoice_id)
        if invoice is None:
            return None
        return to_lightning_invoice(invoice)

    async def get_info(self) -> GetInfoResponse:
        response = await self._gateway.send("GET", "info")
        assert response is not None
        return _decode(response, GetInfoResponse)

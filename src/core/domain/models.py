"""Modelos del dominio (Pydantic v2).

Dos familias de modelos conviven aquí:
- Registros nativos de Lightning Charge (`ChargeInvoice`, `GetInfoResponse`...),
  tal como llegan por la red. Toleran campos extra.
- Modelos genéricos (`LightningInvoice`, `LightningNodeInformation`...) que
  comparten todos los backends de nodo.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class LightningInvoiceStatus(str, Enum):
    """Estado genérico de una factura, común a todos los backends."""

    UNPAID = "unpaid"
    PAID = "paid"
    EXPIRED = "expired"


class InvoiceRequest(BaseModel):
    """Petición de creación de factura (independiente del backend)."""

    amount: int = Field(
        ...,
        ge=0,
        description="Importe en millisatoshi.",
    )
    expiry: timedelta = Field(
        ...,
        description="Tiempo de validez de la factura.",
    )
    description: str | None = Field(
        default=None,
        description="Descripción legible; se omite en la petición si es None.",
    )

    @field_validator("expiry")
    @classmethod
    def _non_negative_expiry(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("expiry must be non-negative")
        return value


class ChargeInvoice(BaseModel):
    """Factura tal como la devuelve Lightning Charge (`/invoice/:id`, `/ws`).

    `id` o `label` pueden venir vacíos según la versión del servidor y el
    camino de creación; el mapeo usa el primero disponible.
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = Field(default=None, description="Identificador Charge.")
    label: str | None = Field(default=None, description="Label c-lightning.")
    msatoshi: int | None = Field(default=None, ge=0, description="Importe en millisatoshi.")
    payreq: str | None = Field(default=None, description="Payment request BOLT11.")
    status: str = Field(..., description="Token de estado propio del backend.")
    rhash: str | None = Field(default=None, description="Hash del preimage.")
    description: str | None = None
    quoted_currency: str | None = None
    quoted_amount: str | None = None
    metadata: Any = None
    created_at: datetime | None = None
    expires_at: datetime | None = None
    paid_at: datetime | None = None


class CreateInvoiceResponse(BaseModel):
    """Respuesta de `POST /invoice`."""

    model_config = ConfigDict(extra="ignore")

    id: str
    payreq: str
    msatoshi: int | None = None
    expires_at: datetime | None = None


class LightningInvoice(BaseModel):
    """Factura genérica que expone el contrato de cliente Lightning."""

    id: str = Field(..., min_length=1, description="Identificador de la factura.")
    amount: int | None = Field(default=None, ge=0, description="Importe en millisatoshi.")
    bolt11: str | None = Field(default=None, description="Payment request BOLT11.")
    status: LightningInvoiceStatus = Field(..., description="Estado normalizado.")
    paid_at: datetime | None = Field(default=None, description="Momento del pago.")
    expires_at: datetime | None = Field(default=None, description="Momento de expiración.")


class ChargeAddress(BaseModel):
    """Entrada de `address`/`binding` en `/info` (formato getinfo de c-lightning)."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    address: str
    port: int = 9735


class GetInfoResponse(BaseModel):
    """Respuesta de `GET /info`."""

    model_config = ConfigDict(extra="ignore")

    id: str
    address: list[ChargeAddress] = Field(default_factory=list)
    binding: list[ChargeAddress] = Field(default_factory=list)
    blockheight: int = 0
    network: str | None = None
    version: str | None = None


class NodeInfo(BaseModel):
    """Dirección pública de un nodo Lightning (`pubkey@host:port`)."""

    node_id: str
    host: str
    port: int = 9735

    def __str__(self) -> str:
        return f"{self.node_id}@{self.host}:{self.port}"


class LightningNodeInformation(BaseModel):
    node_infos: list[NodeInfo] = Field(default_factory=list)
    block_height: int = 0


class OpenChannelRequest(BaseModel):
    node_info: NodeInfo
    channel_amount_sat: int = Field(..., gt=0)
    fee_rate: int | None = Field(default=None, ge=0, description="sat/vbyte.")

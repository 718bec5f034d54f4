"""Tabla de normalización de estados de factura.

Compartida por todos los adaptadores de backend: cualquier token "paid",
"expired" o "unpaid/pending" converge al mismo `LightningInvoiceStatus`.
"""

from __future__ import annotations

from core.domain.errors import InvoiceStatusError
from core.domain.models import LightningInvoiceStatus

_STATUS_TABLE: dict[str, LightningInvoiceStatus] = {
    "paid": LightningInvoiceStatus.PAID,
    "complete": LightningInvoiceStatus.PAID,
    "unpaid": LightningInvoiceStatus.UNPAID,
    "pending": LightningInvoiceStatus.UNPAID,
    "expired": LightningInvoiceStatus.EXPIRED,
}


def to_invoice_status(token: str) -> LightningInvoiceStatus:
    """Traduce el token del backend; lanza `InvoiceStatusError` si es desconocido."""

    try:
        return _STATUS_TABLE[token.strip().lower()]
    except KeyError:
        raise InvoiceStatusError(token) from None

"""Traducción entre registros de Charge y modelos genéricos.

Funciones puras: sin I/O ni estado.
"""

from __future__ import annotations

from core.domain.errors import LightningClientError
from core.domain.models import (
    ChargeInvoice,
    GetInfoResponse,
    InvoiceRequest,
    LightningInvoice,
    LightningNodeInformation,
    NodeInfo,
)
from core.domain.status import to_invoice_status


def to_lightning_invoice(invoice: ChargeInvoice) -> LightningInvoice:
    """Mapea una factura Charge al modelo genérico.

    El estado sale únicamente de `invoice.status` vía la tabla compartida.
    """

    invoice_id = invoice.id or invoice.label
    if not invoice_id:
        raise LightningClientError("Charge invoice carries neither id nor label")
    return LightningInvoice(
        id=invoice_id,
        amount=invoice.msatoshi,
        bolt11=invoice.payreq,
        status=to_invoice_status(invoice.status),
        paid_at=invoice.paid_at,
        expires_at=invoice.expires_at,
    )


def to_invoice_form(request: InvoiceRequest) -> dict[str, str]:
    """Campos form-encoded de `POST /invoice` (msatoshi, segundos enteros)."""

    form = {
        "msatoshi": str(int(request.amount)),
        "expiry": str(int(request.expiry.total_seconds())),
    }
    if request.description is not None:
        form["description"] = request.description
    return form


def to_node_information(info: GetInfoResponse) -> LightningNodeInformation:
    # Sin direcciones anunciadas, Charge solo expone los bindings locales.
    addresses = info.address or info.binding
    return LightningNodeInformation(
        node_infos=[
            NodeInfo(node_id=info.id, host=addr.address, port=addr.port)
            for addr in addresses
        ],
        block_height=info.blockheight,
    )

"""Componentes de UI para CLI (Rich).

- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import LightningInvoice, LightningInvoiceStatus, LightningNodeInformation

_STATUS_STYLES = {
    LightningInvoiceStatus.PAID: "green",
    LightningInvoiceStatus.UNPAID: "yellow",
    LightningInvoiceStatus.EXPIRED: "red",
}


def print_banner(console: Console, endpoint: str) -> None:
    """Imprime el banner con el endpoint activo (sin credenciales)."""

    title = Text("charge-lightning", style="bold cyan")
    subtitle = Text(endpoint, style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_invoices_table(invoices: Iterable[LightningInvoice], title: str = "Invoices") -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Amount (msat)", justify="right")
    table.add_column("Expires at", style="dim")
    table.add_column("Paid at", style="dim")
    table.add_column("BOLT11", style="magenta", overflow="fold")
    for invoice in invoices:
        table.add_row(
            invoice.id,
            Text(invoice.status.value, style=_STATUS_STYLES[invoice.status]),
            "-" if invoice.amount is None else str(invoice.amount),
            invoice.expires_at.isoformat() if invoice.expires_at else "-",
            invoice.paid_at.isoformat() if invoice.paid_at else "-",
            invoice.bolt11 or "-",
        )
    return table


def build_node_info_panel(info: LightningNodeInformation) -> Panel:
    body = Text()
    body.append(f"Block height: {info.block_height}\n", style="bold")
    if info.node_infos:
        for node in info.node_infos:
            body.append(f"- {node}\n")
    else:
        body.append("No public address advertised.", style="dim")
    return Panel(body, title=Text("Node info", style="bold yellow"), border_style="yellow")

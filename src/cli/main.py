"""CLI principal (Typer).

Comandos finos sobre `ChargeClient`; la lógica vive en `adapters.charge`.
"""

from __future__ import annotations

import asyncio
from datetime import timedelta

import typer
from rich.console import Console

from adapters.charge import build_charge_client
from cli import doctor
from cli.ui_components import build_invoices_table, build_node_info_panel, print_banner
from core.config import AppSettings
from core.domain.errors import LightningClientError
from core.logging_config import configure_logging

app = typer.Typer(no_args_is_help=True, help="Lightning Charge client.")
invoice_app = typer.Typer(no_args_is_help=True, help="Create and inspect invoices.")
app.add_typer(invoice_app, name="invoice")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _fail(exc: Exception) -> typer.Exit:
    _console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


@app.command()
def info() -> None:
    """Show node information reported by Charge."""

    async def _run() -> None:
        async with build_charge_client() as client:
            print_banner(_console, str(client.endpoint))
            _console.print(build_node_info_panel(await client.get_info()))

    try:
        asyncio.run(_run())
    except LightningClientError as exc:
        raise _fail(exc) from exc


@invoice_app.command("create")
def create_invoice(
    msatoshi: int = typer.Argument(..., min=0, help="Amount in millisatoshi."),
    expiry: int = typer.Option(3600, "--expiry", min=0, help="Expiry in seconds."),
    description: str | None = typer.Option(None, "--description", "-d"),
) -> None:
    """Create an invoice."""

    async def _run() -> None:
        async with build_charge_client() as client:
            invoice = await client.create_invoice(msatoshi, description, timedelta(seconds=expiry))
        _console.print(build_invoices_table([invoice], title="Created invoice"))

    try:
        asyncio.run(_run())
    except LightningClientError as exc:
        raise _fail(exc) from exc


@invoice_app.command("get")
def get_invoice(invoice_id: str = typer.Argument(...)) -> None:
    """Fetch an invoice by id."""

    async def _run() -> bool:
        async with build_charge_client() as client:
            invoice = await client.get_invoice(invoice_id)
        if invoice is None:
            return False
        _console.print(build_invoices_table([invoice]))
        return True

    try:
        found = asyncio.run(_run())
    except LightningClientError as exc:
        raise _fail(exc) from exc
    if not found:
        _console.print(f"[yellow]Invoice {invoice_id} not found.[/yellow]")
        raise typer.Exit(code=1)


@app.command()
def listen(
    count: int = typer.Option(0, "--count", "-n", min=0, help="Stop after N updates (0 = forever)."),
) -> None:
    """Stream invoice updates until interrupted."""

    async def _run() -> None:
        async with build_charge_client() as client:
            async with await client.listen() as session:
                seen = 0
                while count == 0 or seen < count:
                    invoice = await session.wait_invoice()
                    if invoice is None:
                        break
                    seen += 1
                    _console.print(build_invoices_table([invoice], title="Invoice update"))

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        _console.print("[dim]Stopped.[/dim]")
    except LightningClientError as exc:
        raise _fail(exc) from exc


def run() -> None:
    app()

"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.charge import CookieFileAuthentication, build_charge_client
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import LightningClientError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_info(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_charge_client(settings) as client:
            info = await client.get_info()
        return True, f"block height {info.block_height}"
    except LightningClientError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="charge-lightning doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if not settings.url:
        table.add_row("Charge URL", "FAIL", "Set CHARGE_URL or run `doctor setup`")
        _console.print(table)
        raise typer.Exit(code=1)

    try:
        client = build_charge_client(settings)
    except LightningClientError as exc:
        table.add_row("Charge URL", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1) from exc
    table.add_row("Charge URL", "OK", str(client.endpoint))

    auth = client.authentication
    if isinstance(auth, CookieFileAuthentication):
        try:
            auth.token()
            table.add_row("Credentials", "OK", f"cookie file {auth.path}")
        except LightningClientError as exc:
            table.add_row("Credentials", "FAIL", str(exc))
    else:
        table.add_row("Credentials", "OK", "user/password from URL")
    asyncio.run(client.aclose())

    ok_info, detail_info = asyncio.run(_check_info(settings))
    table.add_row("GET /info", "OK" if ok_info else "FAIL", detail_info)

    _console.print(table)
    if not ok_info:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    url = typer.prompt("Charge URL (https://api-token:<token>@host/)").strip()
    cookie = typer.prompt("Cookie file path (empty to use URL credentials)", default="", show_default=False).strip()
    if not url:
        raise typer.BadParameter("url is required")

    env_path = write_user_env_vars(
        {
            "CHARGE_URL": url,
            "CHARGE_COOKIE_FILE_PATH": cookie or None,
        }
    )
    _console.print(f"[green]Saved Charge config to:[/green] {env_path}")

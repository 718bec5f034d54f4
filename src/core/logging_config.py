"""Configuración de logging para los entry-points.

Las librerías (`core`, `adapters`) solo usan `logging.getLogger(__name__)`;
únicamente la CLI instala handlers.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "INFO", console: Console | None = None) -> None:
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # httpx registra cada request en INFO; demasiado ruido para la CLI.
    logging.getLogger("httpx").setLevel(logging.WARNING)

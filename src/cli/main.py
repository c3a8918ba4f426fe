"""CLI principal (Typer).

Por qué Typer + Rich:
- Typer da parsing/ayuda tipada sin boilerplate de argparse.
- Rich se usa para paneles/tablas; los resultados "crudos" se imprimen sin
  markup para que la salida se pueda encadenar en pipelines.

Cada comando recibe `OPERATION PAYLOAD`, igual que la API de `core.services.toolkit`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.host_info import collect_host_info
from adapters.ioc_lookup import InQuestDomainClassifier
from cli import doctor
from cli.ui_components import build_host_info_table, build_lookup_panel, print_banner
from core.config import AppSettings
from core.domain.operations import ExtraOperation, MaliciousOperation, SystemInfoField
from core.errors import MercyError, UnsupportedOperationError
from core.services import toolkit

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Mercy: helpers for security analysts (decode, hash, hex dump, IOC lookups, host/network info).",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(*, verbose: bool, settings: AppSettings) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx/httpcore son muy verbosos en DEBUG.
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _print_error(exc: Exception) -> None:
    _err_console.print(f"Error: {exc}", style="bold red", markup=False, highlight=False, emoji=False, soft_wrap=True)


def _emit(action: Callable[[], str | None]) -> None:
    """Ejecuta la operación y traduce errores tipados a exit codes."""

    try:
        output = action()
    except UnsupportedOperationError as exc:
        _print_error(exc)
        raise typer.Exit(code=2) from exc
    except MercyError as exc:
        _print_error(exc)
        raise typer.Exit(code=1) from exc
    if output is not None:
        _console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging."),
) -> None:
    settings = AppSettings()
    _configure_logging(verbose=verbose, settings=settings)
    ctx.obj = settings


@app.command()
def source() -> None:
    """Learn more about the package."""

    print_banner(_console)
    _console.print(toolkit.source_info().render(), markup=False, highlight=False)


@app.command()
def decode(
    operation: str = typer.Argument(..., help="One of: base64, rot13."),
    payload: str = typer.Argument(..., help="Encoded text."),
) -> None:
    """Decode a message."""

    _emit(lambda: toolkit.decode(operation, payload))


@app.command()
def encode(
    operation: str = typer.Argument(..., help="One of: base64."),
    payload: str = typer.Argument(..., help="Plain text."),
) -> None:
    """Encode a message."""

    _emit(lambda: toolkit.encode(operation, payload))


@app.command(name="hash")
def hash_command(
    operation: str = typer.Argument(..., help="One of: sha2_256, md5."),
    payload: str = typer.Argument(..., help="Text to hash (UTF-8)."),
) -> None:
    """Hash a message."""

    _emit(lambda: toolkit.hash_text(operation, payload))


@app.command(name="hex")
def hex_command(
    ctx: typer.Context,
    operation: str = typer.Argument(..., help="One of: hex_dump."),
    path: str = typer.Argument(..., help="File to dump."),
) -> None:
    """Dump hexadecimal values of a file."""

    _emit(lambda: toolkit.hex_dump(operation, path, ctx.obj))


@app.command()
def malicious(
    ctx: typer.Context,
    operation: str = typer.Argument(..., help="One of: status."),
    domain: str = typer.Argument(..., help="Domain to classify."),
    details: bool = typer.Option(False, "--details", help="Show a panel with the query and record count."),
) -> None:
    """Classify a domain via the InQuest IOC lookup service."""

    settings: AppSettings = ctx.obj
    if not details:
        _emit(lambda: toolkit.malicious(operation, domain, settings))
        return

    def _lookup() -> None:
        MaliciousOperation.parse(operation)
        result = asyncio.run(InQuestDomainClassifier(settings).lookup(domain))
        _console.print(build_lookup_panel(result))

    _emit(_lookup)


@app.command()
def extra(
    ctx: typer.Context,
    operation: str = typer.Argument(..., help="One of: internal_ip, system_info, defang, whois."),
    payload: str = typer.Argument("", help="system_info field, URL/IP to defang, or domain for WHOIS."),
    table: bool = typer.Option(False, "--table", help="Render `system_info all` as a table."),
) -> None:
    """Information about various data points."""

    settings: AppSettings = ctx.obj
    if table and operation == ExtraOperation.SYSTEM_INFO.value and payload == SystemInfoField.ALL.value:
        _console.print(build_host_info_table(collect_host_info()))
        return

    _emit(lambda: toolkit.extra(operation, payload, settings))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

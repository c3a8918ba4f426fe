"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import socket

import typer
from rich.console import Console
from rich.table import Table

from adapters.host_info import collect_host_info
from adapters.http_client import build_async_client
from adapters.ioc_lookup import read_artifact, scoped_artifact
from adapters.network import internal_ip
from core.config import AppSettings, get_user_env_file
from core.errors import MercyError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_whois(settings: AppSettings) -> tuple[bool, str]:
    try:
        with socket.create_connection(
            (settings.whois_server, settings.whois_port),
            timeout=settings.whois_timeout_seconds,
        ):
            pass
        return True, f"{settings.whois_server}:{settings.whois_port}"
    except OSError as exc:
        return False, str(exc)


def _check_artifact_dir(settings: AppSettings) -> tuple[bool, str]:
    """Write, read back and remove one artifact, like a real lookup does."""

    try:
        with scoped_artifact('{"data": []}', settings.artifact_dir) as path:
            read_artifact(path)
            location = str(path.parent)
        return True, location
    except MercyError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Mercy Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("IOC base_url", "OK", settings.ioc_base_url)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.ioc_base_url, settings))
    table.add_row("IOC service", "OK" if ok_http else "FAIL", detail_http)

    ok_whois, detail_whois = _check_whois(settings)
    table.add_row("WHOIS server", "OK" if ok_whois else "FAIL", detail_whois)

    try:
        table.add_row("Internal IP", "OK", internal_ip(settings))
    except MercyError as exc:
        table.add_row("Internal IP", "FAIL", str(exc))

    # Host
    info = collect_host_info()
    missing = [name for name, value in info.model_dump().items() if value is None]
    table.add_row(
        "Host info (psutil)",
        "OK" if not missing else "PARTIAL",
        "all fields available" if not missing else "missing: " + ", ".join(missing),
    )

    ok_artifact, detail_artifact = _check_artifact_dir(settings)
    table.add_row("Artifact dir", "OK" if ok_artifact else "FAIL", detail_artifact)

    _console.print(table)

    if not ok_artifact:
        _console.print(
            "\n[yellow]Note:[/yellow] Set MERCY_ARTIFACT_DIR to a writable directory; `malicious status` needs it."
        )

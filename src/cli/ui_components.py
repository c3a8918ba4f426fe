"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Classification, HostInfo, LookupResult

_CLASSIFICATION_STYLES: dict[Classification, str] = {
    Classification.MALICIOUS: "bold red",
    Classification.SUSPICIOUS: "bold yellow",
    Classification.UNKNOWN: "bold cyan",
    Classification.UNCLASSIFIED: "dim",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Solo se muestra en `source`; el resto de comandos imprime resultados
      limpios para poder encadenarlos en pipelines.
    """

    title = Text("MERCY", style="bold cyan")
    subtitle = Text("Decoding • Hashing • Hex dumps • IOC lookups", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_lookup_panel(result: LookupResult) -> Panel:
    """Panel con el veredicto y el número de registros del servicio IOC."""

    style = _CLASSIFICATION_STYLES.get(result.classification, "white")
    body = Text()
    body.append(f"{result.classification.value}\n", style=style)
    body.append(f"\nRecords: {len(result.records)}", style="dim")
    body.append(f"\nQuery: {result.url}", style="dim")
    return Panel(body, title=Text(result.domain, style="bold"), border_style=style.split()[-1])


def build_host_info_table(info: HostInfo) -> Table:
    table = Table(title="System Information")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    def _fmt(value: object, suffix: str = "") -> str:
        return "n/a" if value is None else f"{value}{suffix}"

    table.add_row("Hostname", _fmt(info.hostname))
    table.add_row("CPU cores", _fmt(info.cpu_cores))
    table.add_row("CPU speed", _fmt(info.cpu_speed_mhz, " MHz"))
    table.add_row("OS release", _fmt(info.os_release))
    table.add_row("Processes", _fmt(info.process_count))
    return table

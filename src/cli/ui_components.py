"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `install`, `bootstrap` y `doctor`.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Outcome, PackageListFile, PackageResult, RunSummary, StepResult

_OUTCOME_STYLES: dict[Outcome, str] = {
    Outcome.INSTALLED: "green",
    Outcome.UPGRADED: "green",
    Outcome.ALREADY_CURRENT: "cyan",
    Outcome.FAILED: "red",
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("bootkit", style="bold cyan")
    subtitle = Text("Paquetes • PATH • Developer Mode", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_result_line(result: PackageResult) -> Text:
    style = _OUTCOME_STYLES[result.outcome]
    line = Text()
    line.append(f"{result.outcome.value:<16}", style=style)
    line.append(result.display_name)
    if result.failed and result.message:
        line.append(f"  ({result.message})", style="dim")
    return line


def build_results_table(summary: RunSummary) -> Table:
    table = Table(title=f"{summary.manager} {summary.mode.value}")
    table.add_column("Package", style="white", no_wrap=True)
    table.add_column("Id", style="dim")
    table.add_column("Outcome")
    table.add_column("Exit", justify="right")
    for result in summary.results:
        table.add_row(
            result.display_name,
            result.identifier,
            Text(result.outcome.value, style=_OUTCOME_STYLES[result.outcome]),
            "" if result.exit_code is None else str(result.exit_code),
        )
    return table


def build_failure_panel(summary: RunSummary) -> Panel | None:
    """Resumen de fallos al final de la ejecución (None si no hay)."""

    if not summary.failures:
        return None
    body = Text()
    for result in summary.failures:
        marker = "required" if result.required else "optional"
        body.append(f"- {result.display_name} [{marker}]", style="bold")
        if result.message:
            body.append(f": {result.message}")
        body.append("\n")
    title = Text(f"{len(summary.failures)} failed", style="bold red")
    return Panel(body, title=title, border_style="red")


def build_steps_table(title: str, steps: Iterable[StepResult]) -> Table:
    table = Table(title=title)
    table.add_column("Step", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    for step in steps:
        if not step.success:
            status = Text("FAIL", style="red")
        elif step.changed:
            status = Text("CHANGED", style="yellow")
        else:
            status = Text("OK", style="green")
        table.add_row(step.name, status, step.detail)
    return table


def build_package_list_table(manager: str, package_list: PackageListFile) -> Table:
    table = Table(title=f"{manager} packages")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("List", style="dim")
    for entry in package_list.packages:
        table.add_row(entry.id, entry.display_name, "primary")
    for entry in package_list.optional:
        table.add_row(entry.id, entry.display_name, "optional")
    return table

"""CLI principal (Typer).

Comandos:
- `install`: instala/actualiza la lista de paquetes de un gestor.
- `bootstrap`: paquetes, PATH, intérprete, Developer Mode, política y verificación.
- `packages`: muestra las listas efectivas.
- `doctor`: diagnósticos del entorno.

Errores:
- Precondiciones (privilegios, ejecutables) y config inválida: mensaje + exit 1.
- Fallos por paquete: se resumen al final; solo los de la lista principal
  hacen que el exit code sea 1.
- Cualquier otra excepción: capturada en `run()`, mensaje + exit 1.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_summary_json
from adapters.host import require_elevation, require_executables
from adapters.package_managers import MANAGER_NAMES, get_package_manager
from cli import doctor, runtime
from cli.ui_components import (
    build_failure_panel,
    build_package_list_table,
    build_results_table,
    build_steps_table,
    format_result_line,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import InstallMode, PackageRequest, PackageResult, RunSummary, StepResult
from core.errors import BootkitError
from core.interfaces.package_manager import PackageManager
from core.interfaces.runner import CommandRunner
from core.resources_loader import resolve_package_list
from core.services.environment import EnvironmentBootstrapper
from core.services.install_pipeline import PipelineHooks, build_requests, run_batch

app = typer.Typer(no_args_is_help=True, help="Idempotent Windows machine bootstrap.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@contextmanager
def _fatal_errors() -> Iterator[None]:
    try:
        yield
    except BootkitError as exc:
        _console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the banner."),
) -> None:
    """Idempotent Windows machine bootstrap."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)


def _check_preconditions(settings: AppSettings, manager: PackageManager) -> None:
    if settings.require_elevation:
        require_elevation()
    require_executables([manager.executable])


def _print_summary(summary: RunSummary) -> None:
    _console.print(build_results_table(summary))
    panel = build_failure_panel(summary)
    if panel is not None:
        _console.print(panel)
    else:
        _console.print(f"[green]All {len(summary.results)} packages OK.[/green]")


def _install_packages(
    settings: AppSettings,
    manager: PackageManager,
    *,
    update_only: bool,
    skip_optional: bool,
    list_path: Path | None,
    runner: CommandRunner,
) -> RunSummary:
    package_list = resolve_package_list(manager.name, settings=settings, explicit_path=list_path)
    mode = InstallMode.from_update_only(update_only)
    requests = build_requests(package_list, mode, skip_optional=skip_optional)

    def on_start(request: PackageRequest) -> None:
        _console.print(f"[dim]{mode.value} {request.identifier}...[/dim]")

    def on_result(result: PackageResult) -> None:
        _console.print(format_result_line(result))

    summary = run_batch(
        requests,
        manager=manager,
        runner=runner,
        mode=mode,
        hooks=PipelineHooks(on_start=on_start, on_result=on_result),
    )
    _print_summary(summary)
    return summary


@app.command()
def install(
    manager_name: str | None = typer.Option(
        None, "--manager", "-m", help=f"Package manager ({', '.join(MANAGER_NAMES)})."
    ),
    update_only: bool = typer.Option(False, "--update-only", help="Upgrade instead of install."),
    skip_optional: bool = typer.Option(False, "--skip-optional", help="Omit the optional package list."),
    list_path: Path | None = typer.Option(None, "--list", help="Package list JSON."),
    report: Path | None = typer.Option(None, "--report", help="Write a JSON report of the run."),
) -> None:
    """Install (or upgrade) every package of a list, one at a time."""

    settings = AppSettings()
    with _fatal_errors():
        manager = get_package_manager(manager_name or settings.package_manager)
        _check_preconditions(settings, manager)
        summary = _install_packages(
            settings,
            manager,
            update_only=update_only,
            skip_optional=skip_optional,
            list_path=list_path,
            runner=runtime.build_runner(),
        )

    if report is not None:
        path = export_summary_json(summary=summary, output_path=report)
        _console.print(f"[green]Report:[/green] {path}")

    raise typer.Exit(code=summary.exit_code)


@app.command()
def bootstrap(
    manager_name: str | None = typer.Option(
        None, "--manager", "-m", help=f"Package manager ({', '.join(MANAGER_NAMES)})."
    ),
    update_only: bool = typer.Option(False, "--update-only", help="Upgrade instead of install."),
    skip_optional: bool = typer.Option(False, "--skip-optional", help="Omit the optional package list."),
    list_path: Path | None = typer.Option(None, "--list", help="Package list JSON."),
) -> None:
    """Packages, then PATH refresh, Developer Mode, execution policy and a final check."""

    settings = AppSettings()
    with _fatal_errors():
        manager = get_package_manager(manager_name or settings.package_manager)
        _check_preconditions(settings, manager)
        runner = runtime.build_runner()
        bootstrapper = EnvironmentBootstrapper(settings, runner=runner, registry=runtime.build_registry())

        summary = _install_packages(
            settings,
            manager,
            update_only=update_only,
            skip_optional=skip_optional,
            list_path=list_path,
            runner=runner,
        )

        steps: list[StepResult] = [
            bootstrapper.refresh_path(),
            bootstrapper.wait_for_interpreter(),
            bootstrapper.ensure_developer_mode(),
            bootstrapper.ensure_execution_policy(),
        ]
        _console.print(build_steps_table("Environment", steps))

        checks = bootstrapper.verify([manager.executable, settings.interpreter_executable])
        _console.print(build_steps_table("Verification", checks))

    failed_steps = [s for s in [*steps, *checks] if not s.success]
    for step in failed_steps:
        logger.warning("%s: %s", step.name, step.detail)
    if summary.exit_code or failed_steps:
        raise typer.Exit(code=1)


@app.command()
def packages(
    manager_name: str | None = typer.Option(
        None, "--manager", "-m", help=f"Package manager ({', '.join(MANAGER_NAMES)})."
    ),
    list_path: Path | None = typer.Option(None, "--list", help="Package list JSON."),
) -> None:
    """Show the effective package lists."""

    settings = AppSettings()
    with _fatal_errors():
        manager = get_package_manager(manager_name or settings.package_manager)
        package_list = resolve_package_list(manager.name, settings=settings, explicit_path=list_path)
    _console.print(build_package_list_table(manager.name, package_list))


def run() -> None:
    # winget/choco output is UTF-8; cp1252 consoles raise UnicodeEncodeError.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    try:
        app()
    except Exception as exc:  # noqa: BLE001 - top-level guard
        logger.debug("Unhandled exception", exc_info=True)
        _console.print(f"[red]Unexpected error:[/red] {exc}")
        sys.exit(1)

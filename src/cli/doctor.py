"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from adapters.host import find_executable, is_elevated, is_english_locale, ui_locale
from adapters.package_managers import MANAGER_NAMES, get_package_manager
from cli import runtime
from core.config import AppSettings, write_user_env_vars
from core.errors import BootkitError, ConfigError
from core.services.environment import EnvironmentBootstrapper

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_environment(settings: AppSettings) -> list[tuple[str, bool, str]]:
    """Developer Mode, PATH and execution policy, read-only."""

    try:
        bootstrapper = EnvironmentBootstrapper(
            settings,
            runner=runtime.build_runner(),
            registry=runtime.build_registry(),
        )
    except BootkitError as exc:
        return [("Registry", False, str(exc))]

    rows: list[tuple[str, bool, str]] = []
    for step in bootstrapper.verify():
        rows.append((step.name, step.success, step.detail))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="bootkit doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    elevated = is_elevated()
    table.add_row(
        "Elevation",
        "OK" if elevated else ("FAIL" if settings.require_elevation else "OPTIONAL"),
        "Administrator" if elevated else "Not elevated -> run from an Administrator console",
    )

    try:
        default_manager = get_package_manager(settings.package_manager).name
    except ConfigError:
        default_manager = None
        table.add_row("Package manager", "FAIL", f"Unknown: {settings.package_manager}")

    for name in MANAGER_NAMES:
        executable = get_package_manager(name).executable
        path = find_executable(executable)
        status = "OK" if path else ("FAIL" if name == default_manager else "OPTIONAL")
        table.add_row(name, status, path or "Not on PATH")

    interpreter = find_executable(settings.interpreter_executable)
    table.add_row(settings.interpreter_executable, "OK" if interpreter else "MISSING", interpreter or "Not on PATH")

    for check, ok, detail in _check_environment(settings):
        table.add_row(check, "OK" if ok else "FAIL", detail)

    current_locale = ui_locale()
    english = is_english_locale(current_locale)
    table.add_row("Locale", "OK" if english else "WARN", current_locale or "unknown")

    _console.print(table)

    if not english:
        _console.print(
            "\n[yellow]Note:[/yellow] Package results are read from English tool output. "
            "On this locale, packages that exit non-zero are reported as failed even when nothing changed."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    manager = typer.prompt(
        "Package manager",
        default=settings.package_manager,
        show_default=True,
    )
    try:
        manager = get_package_manager(manager).name
    except ConfigError:
        raise typer.BadParameter(f"package manager must be one of: {', '.join(MANAGER_NAMES)}") from None

    policy = typer.prompt(
        "Execution policy (CurrentUser)",
        default=settings.execution_policy,
        show_default=True,
    ).strip()
    if not policy:
        raise typer.BadParameter("execution policy is required")

    env_path = write_user_env_vars(
        {
            "BOOTKIT_PACKAGE_MANAGER": manager,
            "BOOTKIT_EXECUTION_POLICY": policy,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

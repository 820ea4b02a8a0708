"""Resolución de listas de paquetes.

Este módulo vive en `core/` porque:
- centraliza el *qué* paquetes se instalan sin acoplarse a la CLI;
- evita duplicar la lógica de rutas (flag > config > usuario > integrada).

Las listas integradas son las del setup personal original; cualquier JSON
con el mismo formato las sustituye por completo.
"""

from __future__ import annotations

import logging
from pathlib import Path

from adapters.package_lists import load_package_list
from core.config import AppSettings, get_user_config_dir
from core.domain.models import PackageEntry, PackageListFile
from core.errors import ConfigError

logger = logging.getLogger(__name__)


BUILTIN_LISTS: dict[str, PackageListFile] = {
    "winget": PackageListFile(
        packages=[
            PackageEntry(id="Git.Git", name="Git"),
            PackageEntry(id="Microsoft.PowerShell", name="PowerShell 7"),
            PackageEntry(id="Microsoft.WindowsTerminal", name="Windows Terminal"),
            PackageEntry(id="Python.Python.3.12", name="Python 3.12"),
            PackageEntry(id="Microsoft.VisualStudioCode", name="Visual Studio Code"),
            PackageEntry(id="JanDeDobbeleer.OhMyPosh", name="Oh My Posh"),
        ],
        optional=[
            PackageEntry(id="7zip.7zip", name="7-Zip"),
            PackageEntry(id="Mozilla.Firefox", name="Firefox"),
            PackageEntry(id="Microsoft.PowerToys", name="PowerToys"),
            PackageEntry(id="GitHub.cli", name="GitHub CLI"),
        ],
    ),
    "choco": PackageListFile(
        packages=[
            PackageEntry(id="nerd-fonts-hack", name="Hack Nerd Font"),
            PackageEntry(id="ripgrep"),
            PackageEntry(id="fzf"),
        ],
        optional=[
            PackageEntry(id="bat"),
            PackageEntry(id="fd"),
            PackageEntry(id="lazygit"),
        ],
    ),
}


def get_default_list_path(manager: str) -> Path | None:
    """Busca `packages-<manager>.json` en ubicaciones comunes.

    Orden:
    1) ./packages-<manager>.json (cwd)
    2) <config de usuario>/packages-<manager>.json
    """

    filename = f"packages-{manager}.json"
    candidates = [
        Path.cwd() / filename,
        get_user_config_dir() / filename,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None


def resolve_package_list(
    manager: str,
    *,
    settings: AppSettings,
    explicit_path: Path | None = None,
) -> PackageListFile:
    """Devuelve la lista efectiva para `manager`.

    Un path explícito o configurado que no existe es un error (no se cae en
    silencio a la lista integrada).
    """

    path = explicit_path or settings.list_path_for(manager)
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Package list not found: {path}")
        logger.info("Using package list %s", path)
        return load_package_list(path)

    found = get_default_list_path(manager)
    if found is not None:
        logger.info("Using package list %s", found)
        return load_package_list(found)

    try:
        return BUILTIN_LISTS[manager]
    except KeyError as exc:
        raise ConfigError(f"No package list for manager: {manager}") from exc

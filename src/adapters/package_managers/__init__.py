"""Gestores de paquetes (adaptadores concretos).

Por qué un paquete:
- Agrupa un módulo por herramienta (winget, Chocolatey).
- Cada módulo implementa `core.interfaces.package_manager.PackageManager`.
"""

from adapters.package_managers.chocolatey import ChocolateyManager
from adapters.package_managers.winget import WingetManager
from core.errors import ConfigError
from core.interfaces.package_manager import PackageManager

_MANAGERS: dict[str, type] = {
    "winget": WingetManager,
    "choco": ChocolateyManager,
    "chocolatey": ChocolateyManager,
}

MANAGER_NAMES = ("winget", "choco")


def get_package_manager(name: str) -> PackageManager:
    try:
        return _MANAGERS[name.strip().lower()]()
    except KeyError as exc:
        raise ConfigError(f"Unknown package manager: {name!r} (expected one of {', '.join(MANAGER_NAMES)})") from exc


__all__ = [
    "ChocolateyManager",
    "MANAGER_NAMES",
    "WingetManager",
    "get_package_manager",
]

"""Acceso mínimo al registro de Windows (winreg).

Rutas en formato PowerShell (`HKLM:\\...`) para que los mensajes coincidan
con lo que un usuario teclearía en la consola.
"""

from __future__ import annotations

try:  # Windows-only dependency, optional for test doubles
    import winreg  # type: ignore
except ImportError:  # pragma: no cover - not available on Linux runners
    winreg = None  # type: ignore

from core.errors import EnvironmentStepError

_HIVE_NAMES = ("HKLM", "HKCU", "HKCR", "HKU", "HKCC")


def split_registry_path(path: str) -> tuple[str, str]:
    """Separa `HKLM:\\SOFTWARE\\X` en ("HKLM", "SOFTWARE\\X")."""

    cleaned = path.replace("/", "\\")
    marker = ":\\"
    if marker not in cleaned:
        raise ValueError(f"Invalid registry path: {path}")
    hive_name, subkey = cleaned.split(marker, 1)
    hive_name = hive_name.upper()
    if hive_name not in _HIVE_NAMES:
        raise ValueError(f"Unsupported hive: {hive_name}")
    return hive_name, subkey.lstrip("\\")


class WindowsRegistryAccessor:
    """Minimal registry helper backed by winreg."""

    def __init__(self) -> None:
        if winreg is None:
            raise EnvironmentStepError("winreg not available on this platform")

    def get_value(self, path: str, value_name: str) -> str | int | None:
        hive, subkey = self._open_args(path)
        try:
            with winreg.OpenKey(hive, subkey) as key:  # type: ignore[union-attr]
                value, _ = winreg.QueryValueEx(key, value_name)  # type: ignore[union-attr]
                return value
        except FileNotFoundError:
            return None

    def set_value(self, path: str, value_name: str, value: str | int) -> None:
        hive, subkey = self._open_args(path)
        value_type = winreg.REG_DWORD if isinstance(value, int) else winreg.REG_SZ  # type: ignore[union-attr]
        try:
            with winreg.CreateKeyEx(hive, subkey, 0, winreg.KEY_WRITE) as key:  # type: ignore[union-attr]
                winreg.SetValueEx(key, value_name, 0, value_type, value)  # type: ignore[union-attr]
        except PermissionError as exc:
            raise EnvironmentStepError(f"Access denied writing {path}\\{value_name}") from exc

    def _open_args(self, path: str) -> tuple[object, str]:
        hive_name, subkey = split_registry_path(path)
        hive_map = {
            "HKLM": winreg.HKEY_LOCAL_MACHINE,  # type: ignore[union-attr]
            "HKCU": winreg.HKEY_CURRENT_USER,  # type: ignore[union-attr]
            "HKCR": winreg.HKEY_CLASSES_ROOT,  # type: ignore[union-attr]
            "HKU": winreg.HKEY_USERS,  # type: ignore[union-attr]
            "HKCC": winreg.HKEY_CURRENT_CONFIG,  # type: ignore[union-attr]
        }
        return hive_map[hive_name], subkey

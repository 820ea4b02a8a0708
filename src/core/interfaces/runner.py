"""Contratos para ejecutar procesos y tocar el registro.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Los tests inyectan runners/registros falsos; el Core nunca llama a
  subprocess ni a winreg directamente.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class CommandResult:
    """Exit code y salida combinada (stdout + stderr) de un proceso."""

    exit_code: int
    output: str


@runtime_checkable
class CommandRunner(Protocol):
    """Ejecuta un comando bloqueando hasta que termina."""

    def run(self, command: Sequence[str]) -> CommandResult:  # pragma: no cover - protocol
        ...


@runtime_checkable
class RegistryAccessor(Protocol):
    """Lectura/escritura mínima de valores del registro.

    Rutas en formato PowerShell: `HKLM:\\SOFTWARE\\...`, `HKCU:\\Environment`.
    """

    def get_value(self, path: str, value_name: str) -> str | int | None:  # pragma: no cover - protocol
        ...

    def set_value(self, path: str, value_name: str, value: str | int) -> None:  # pragma: no cover - protocol
        ...

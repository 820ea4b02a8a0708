"""Jerarquía de excepciones de bootkit.

Por qué aquí:
- Las precondiciones (privilegios, ejecutables) son fatales y la CLI las
  traduce a exit code 1.
- Los fallos por paquete NO son excepciones: se registran en el resumen.
"""

from __future__ import annotations


class BootkitError(Exception):
    """Base de todos los errores del toolkit."""


class ConfigError(BootkitError):
    """Configuración inválida o lista de paquetes ilegible."""


class PreconditionError(BootkitError):
    """Precondición no satisfecha antes de empezar una ejecución."""


class MissingPrivilegeError(PreconditionError):
    """La consola no se ejecuta como administrador."""


class MissingToolError(PreconditionError):
    """Un ejecutable requerido no está en el PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Required executable not found on PATH: {executable}")
        self.executable = executable


class EnvironmentStepError(BootkitError):
    """Fallo al leer o escribir estado del sistema (registro, política)."""

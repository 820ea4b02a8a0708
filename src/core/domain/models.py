"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (listas JSON, CLI) sin acoplar el Core a
  subprocess ni al registro de Windows.
- Serialización estable para el reporte JSON de cada ejecución.

Nota:
- Estos modelos describen *qué* se pidió y *qué* pasó, no *cómo* se ejecuta.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InstallMode(str, Enum):
    """Acción solicitada al gestor de paquetes."""

    INSTALL = "install"
    UPGRADE = "upgrade"

    @classmethod
    def from_update_only(cls, update_only: bool) -> "InstallMode":
        """Derive the mode from the `--update-only` flag."""

        return cls.UPGRADE if update_only else cls.INSTALL


class Outcome(str, Enum):
    """Clasificación final de una operación de paquete."""

    INSTALLED = "installed"
    UPGRADED = "upgraded"
    ALREADY_CURRENT = "already_current"
    FAILED = "failed"


class PackageRequest(BaseModel):
    """Una petición de instalación/actualización.

    Por qué `required`:
    - Los paquetes de la lista principal son "hard fail" (afectan al exit code).
    - Los de la lista opcional solo se reportan.
    """

    identifier: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Identificador en el gestor (p.ej. 'Git.Git', 'nerd-fonts-hack').",
    )
    display_name: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="Nombre legible para tablas y resumen.",
    )
    mode: InstallMode = Field(
        default=InstallMode.INSTALL,
        description="install o upgrade.",
    )
    required: bool = Field(
        default=True,
        description="True si pertenece a la lista principal.",
    )


class PackageResult(BaseModel):
    """Resultado clasificado de una petición."""

    display_name: str = Field(..., min_length=1)
    identifier: str = Field(..., min_length=1)
    outcome: Outcome
    exit_code: int | None = Field(
        default=None,
        description="Exit code del proceso (None si no llegó a ejecutarse).",
    )
    message: str | None = Field(
        default=None,
        max_length=10_000,
        description="Diagnóstico para fallos (última línea útil de la salida).",
    )
    required: bool = True

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED


class RunSummary(BaseModel):
    """Agregado de una ejecución por lotes.

    Por qué un agregado:
    - Centraliza resultados para tabla, resumen de fallos y exportación JSON.
    """

    manager: str = Field(..., min_length=1)
    mode: InstallMode
    results: list[PackageResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def failures(self) -> list[PackageResult]:
        return [r for r in self.results if r.failed]

    @property
    def hard_failures(self) -> list[PackageResult]:
        return [r for r in self.failures if r.required]

    @property
    def exit_code(self) -> int:
        return 1 if self.hard_failures else 0

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)


class StepResult(BaseModel):
    """Resultado de un paso de bootstrap del entorno (registro, PATH, política)."""

    name: str = Field(..., min_length=1)
    success: bool
    changed: bool = False
    detail: str = ""


class PackageEntry(BaseModel):
    """Entrada de una lista; mismas restricciones que `PackageRequest`."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, max_length=256)
    name: str | None = Field(default=None, min_length=1, max_length=256)

    @property
    def display_name(self) -> str:
        return self.name or self.id


class PackageListFile(BaseModel):
    """Listas de paquetes (data-driven): principal + opcional."""

    packages: list[PackageEntry] = Field(default_factory=list)
    optional: list[PackageEntry] = Field(default_factory=list)

"""Contrato de un gestor de paquetes (winget, Chocolatey).

Reglas de diseño:
- `build_command` es puro: construye argv, no ejecuta nada.
- `vocabulary` describe cómo leer la salida de la herramienta.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import PackageRequest
from core.domain.vocabulary import OutputVocabulary


@runtime_checkable
class PackageManager(Protocol):
    name: str
    executable: str
    vocabulary: OutputVocabulary

    def build_command(self, request: PackageRequest) -> list[str]:
        """Devuelve argv completo (no interactivo) para la petición."""

        ...

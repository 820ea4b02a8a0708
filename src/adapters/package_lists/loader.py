"""Carga de listas JSON de paquetes (data-driven).

Formato:
    {"packages": [{"id": "Git.Git", "name": "Git"}, ...],
     "optional": [{"id": "Mozilla.Firefox"}]}

En vez de codificar cada paquete en un script, la lista es un dato: el usuario
puede apuntar a su propio JSON con `--list` o `BOOTKIT_WINGET_LIST_PATH`.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import PackageListFile
from core.errors import ConfigError


def load_package_list(path: Path) -> PackageListFile:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read package list {path}: {exc}") from exc
    try:
        data = json.loads(raw)
        return PackageListFile.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid package list {path}: {exc}") from exc

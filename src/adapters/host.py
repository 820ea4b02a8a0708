"""Comprobaciones del host: privilegios, ejecutables y locale.

Por qué separado:
- Son precondiciones (fatales) y diagnósticos (`doctor`), no lógica del Core.
"""

from __future__ import annotations

import locale
import os
import shutil
import sys
from typing import Iterable

from core.errors import MissingPrivilegeError, MissingToolError


def is_elevated() -> bool:
    """True si el proceso corre como administrador (root fuera de Windows)."""

    if sys.platform == "win32":
        import ctypes  # noqa: PLC0415

        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except OSError:
            return False
    geteuid = getattr(os, "geteuid", None)
    return bool(geteuid and geteuid() == 0)


def find_executable(name: str) -> str | None:
    return shutil.which(name)


def ui_locale() -> str | None:
    """Locale de la UI (p.ej. 'en_US'); None si no se puede determinar."""

    lang, _ = locale.getlocale()
    return lang


def is_english_locale(value: str | None) -> bool:
    if not value:
        return True
    return value.lower().startswith(("en", "english"))


def require_elevation() -> None:
    if not is_elevated():
        raise MissingPrivilegeError("This command must run from an elevated (Administrator) console")


def require_executables(names: Iterable[str]) -> None:
    for name in names:
        if find_executable(name) is None:
            raise MissingToolError(name)

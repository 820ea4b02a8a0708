"""Configuración de bootkit.

Fuentes, de menor a mayor prioridad:
- valores por defecto de `AppSettings`;
- `.env` del directorio de trabajo y después `%APPDATA%\\bootkit\\.env`;
- variables de entorno `BOOTKIT_*`.

`bootkit doctor configure` solo escribe en el `.env` por usuario.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "bootkit"


def get_user_config_dir() -> Path:
    """`%APPDATA%\\bootkit` en Windows; XDG fuera de Windows (desarrollo y tests)."""

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(appdata) / APP_DIR_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(xdg) / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        data[key] = value.strip().strip("\"'")
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Fusiona `values` en el .env por usuario y devuelve su ruta.

    Las claves existentes que no aparecen en `values` se conservan; el
    fichero se reescribe con las claves ordenadas.
    """

    target = env_path or get_user_env_file()
    merged = _parse_env_lines(target.read_text(encoding="utf-8")) if target.is_file() else {}
    merged.update((key, value) for key, value in values.items() if value is not None)

    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"# escrito por `bootkit doctor configure`\n{body}", encoding="utf-8")
    return target


class AppSettings(BaseSettings):
    """Ajustes de instalación y bootstrap, validados al arrancar cada comando.

    Un valor inválido (p.ej. `BOOTKIT_INTERPRETER_POLL_ATTEMPTS=0`) falla antes
    de tocar el sistema.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOTKIT_",
        extra="ignore",
        case_sensitive=False,
        # el .env por usuario pisa al del directorio de trabajo
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    package_manager: str = Field(
        default="winget",
        min_length=1,
        description="Gestor por defecto ('winget' o 'choco').",
    )
    winget_list_path: Path | None = Field(
        default=None,
        description="JSON con la lista de paquetes winget (sustituye a la integrada).",
    )
    choco_list_path: Path | None = Field(
        default=None,
        description="JSON con la lista de paquetes Chocolatey (sustituye a la integrada).",
    )

    require_elevation: bool = Field(
        default=True,
        description="Abortar si la consola no es de administrador.",
    )
    execution_policy: str = Field(
        default="RemoteSigned",
        min_length=1,
        description="Política de ejecución deseada para el scope CurrentUser.",
    )

    interpreter_executable: str = Field(
        default="python",
        min_length=1,
        description="Intérprete a esperar tras instalarlo (poll loop).",
    )
    interpreter_poll_attempts: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Intentos del poll loop del intérprete.",
    )
    interpreter_poll_interval_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Espera entre intentos (segundos).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )

    def list_path_for(self, manager: str) -> Path | None:
        """Ruta configurada para la lista de un gestor (si existe)."""

        if manager == "winget":
            return self.winget_list_path
        if manager in ("choco", "chocolatey"):
            return self.choco_list_path
        return None

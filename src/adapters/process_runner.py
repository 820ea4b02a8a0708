"""Wrapper de subprocess.

Por qué un wrapper:
- Estandariza cómo se capturan salida y exit code (stderr mezclado en stdout,
  igual que `2>&1` en PowerShell).
- Facilita testeo: el Core recibe cualquier `CommandRunner`.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from core.interfaces.runner import CommandResult

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Ejecuta comandos de forma síncrona, sin timeout.

    `FileNotFoundError` (ejecutable ausente) se propaga: decidir si es fatal
    le corresponde al llamador.
    """

    def run(self, command: Sequence[str]) -> CommandResult:
        completed = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        logger.debug("%s exited with %s", command[0], completed.returncode)
        return CommandResult(exit_code=completed.returncode, output=completed.stdout or "")

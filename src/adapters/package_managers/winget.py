"""Adaptador: winget (Windows Package Manager).

Salida observada (en-US):
- "Successfully installed" / "Successfully upgraded" tras aplicar cambios.
- "Found an existing package already installed" al pedir install de algo presente.
- "No available upgrade found" / "No newer package versions are available"
  cuando `upgrade` no tiene nada que hacer (y sale con exit code != 0).
"""

from __future__ import annotations

from core.domain.models import InstallMode, PackageRequest
from core.domain.vocabulary import OutputVocabulary

# APPINSTALLER_CLI_ERROR_UPDATE_NOT_APPLICABLE / _PACKAGE_ALREADY_INSTALLED,
# firmados (PowerShell) y sin firmar (GetExitCodeProcess).
_UPDATE_NOT_APPLICABLE = 0x8A15002B
_PACKAGE_ALREADY_INSTALLED = 0x8A150061

WINGET_VOCABULARY = OutputVocabulary(
    success_phrases=(
        "Successfully installed",
        "Successfully upgraded",
    ),
    already_current_phrases=(
        "Found an existing package already installed",
        "No available upgrade found",
        "No newer package versions are available",
        "No applicable upgrade found",
    ),
    already_current_exit_codes=frozenset(
        {
            _UPDATE_NOT_APPLICABLE,
            _UPDATE_NOT_APPLICABLE - 2**32,
            _PACKAGE_ALREADY_INSTALLED,
            _PACKAGE_ALREADY_INSTALLED - 2**32,
        }
    ),
)


class WingetManager:
    name = "winget"
    executable = "winget"
    vocabulary = WINGET_VOCABULARY

    def build_command(self, request: PackageRequest) -> list[str]:
        subcommand = "upgrade" if request.mode is InstallMode.UPGRADE else "install"
        return [
            self.executable,
            subcommand,
            "--id",
            request.identifier,
            "--exact",
            "--silent",
            "--accept-package-agreements",
            "--accept-source-agreements",
        ]

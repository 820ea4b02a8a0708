"""Adaptador: Chocolatey.

Salida observada (en-US):
- "The install of <pkg> was successful." / "The upgrade of <pkg> was successful."
- "<pkg> v<ver> already installed." (exit code 1 con `install`).
- "<pkg> v<ver> is the latest version available based on your source(s)."
"""

from __future__ import annotations

from core.domain.models import InstallMode, PackageRequest
from core.domain.vocabulary import OutputVocabulary

CHOCOLATEY_VOCABULARY = OutputVocabulary(
    success_phrases=(
        "was successful",
        "Chocolatey installed 1/1",
        "Chocolatey upgraded 1/1",
    ),
    already_current_phrases=(
        "already installed",
        "is the latest version available",
    ),
)


class ChocolateyManager:
    name = "choco"
    executable = "choco"
    vocabulary = CHOCOLATEY_VOCABULARY

    def build_command(self, request: PackageRequest) -> list[str]:
        subcommand = "upgrade" if request.mode is InstallMode.UPGRADE else "install"
        return [self.executable, subcommand, request.identifier, "-y", "--no-progress"]

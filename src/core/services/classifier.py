"""Package outcome classification.

A pure function over ``(exit_code, output, mode)``: no process spawning, no
printing. Success is the OR of several independent signals because the
package managers are inconsistent about exit codes:

- exit code zero;
- any success phrase in the output;
- any already-current phrase (or already-current exit code).

An already-current signal always wins over the fresh install/upgrade
outcome, whatever the exit code says.
"""

from __future__ import annotations

from core.domain.models import InstallMode, Outcome, PackageRequest, PackageResult
from core.domain.vocabulary import OutputVocabulary

_MAX_MESSAGE = 500


def classify_outcome(
    exit_code: int,
    output: str,
    mode: InstallMode,
    vocabulary: OutputVocabulary,
) -> Outcome:
    if vocabulary.matches_already_current(output) or exit_code in vocabulary.already_current_exit_codes:
        return Outcome.ALREADY_CURRENT
    if exit_code == 0 or vocabulary.matches_success(output):
        return Outcome.UPGRADED if mode is InstallMode.UPGRADE else Outcome.INSTALLED
    return Outcome.FAILED


def last_meaningful_line(output: str) -> str | None:
    """Last non-empty line of the output, used as the failure message."""

    for line in reversed(output.splitlines()):
        stripped = line.strip()
        if stripped:
            return stripped
    return None


def classify(
    exit_code: int,
    output: str,
    request: PackageRequest,
    vocabulary: OutputVocabulary,
) -> PackageResult:
    outcome = classify_outcome(exit_code, output, request.mode, vocabulary)
    message = None
    if outcome is Outcome.FAILED:
        message = (last_meaningful_line(output) or f"exit code {exit_code}")[:_MAX_MESSAGE]
    return PackageResult(
        display_name=request.display_name,
        identifier=request.identifier,
        outcome=outcome,
        exit_code=exit_code,
        message=message,
        required=request.required,
    )

"""Output vocabulary used to classify package-manager runs.

Package managers disagree on what "success" looks like: some return a
non-zero exit code when there is nothing to do, some print a success line
and still exit non-zero. Each manager adapter ships one of these objects
with its own phrases; the classifier only ever sees this structure.

The phrases are the English strings the tools print. A non-English UI
locale changes them, and every non-zero exit then classifies as failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutputVocabulary:
    """Case-sensitive phrases (and exit codes) a manager uses to report state."""

    success_phrases: tuple[str, ...] = ()
    already_current_phrases: tuple[str, ...] = ()
    already_current_exit_codes: frozenset[int] = field(default_factory=frozenset)

    def matches_success(self, output: str) -> bool:
        return any(phrase in output for phrase in self.success_phrases)

    def matches_already_current(self, output: str) -> bool:
        return any(phrase in output for phrase in self.already_current_phrases)

"""Exportación JSON del resumen de una ejecución.

Por qué JSON:
- Permite comparar ejecuciones (máquina nueva vs. re-ejecución idempotente).
- Persiste el diagnóstico de fallos sin depender de la salida de consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import Outcome, RunSummary


def summary_payload(summary: RunSummary) -> dict[str, object]:
    payload = summary.model_dump(mode="json")
    payload["counts"] = {outcome.value: summary.count(outcome) for outcome in Outcome}
    payload["failures"] = [r.display_name for r in summary.failures]
    payload["exit_code"] = summary.exit_code
    return payload


def export_summary_json(*, summary: RunSummary, output_path: Path) -> Path:
    """Exporta `RunSummary` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(summary_payload(summary), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path

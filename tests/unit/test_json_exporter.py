"""Test the JSON run report."""

import json

from adapters.json_exporter import export_summary_json
from core.domain.models import InstallMode, Outcome, PackageResult, RunSummary


def test_report_contains_counts_and_failures(tmp_path):
    summary = RunSummary(
        manager="choco",
        mode=InstallMode.INSTALL,
        results=[
            PackageResult(display_name="fzf", identifier="fzf", outcome=Outcome.ALREADY_CURRENT, exit_code=1),
            PackageResult(
                display_name="bat", identifier="bat", outcome=Outcome.FAILED, exit_code=1, message="boom",
                required=False,
            ),
        ],
    )

    path = export_summary_json(summary=summary, output_path=tmp_path / "reports" / "run.json")
    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["manager"] == "choco"
    assert data["mode"] == "install"
    assert data["counts"]["already_current"] == 1
    assert data["counts"]["failed"] == 1
    assert data["failures"] == ["bat"]
    assert data["exit_code"] == 0
    assert data["results"][1]["message"] == "boom"

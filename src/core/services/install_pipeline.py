"""Sequential package installation runs.

The CLI delegates the whole batch to these helpers so the loop stays free
of printing; UI layers observe progress through ``PipelineHooks``.

A failed package is recorded and the run moves on: no parallelism, no
retry, no rollback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from core.domain.models import (
    InstallMode,
    Outcome,
    PackageListFile,
    PackageRequest,
    PackageResult,
    RunSummary,
)
from core.interfaces.package_manager import PackageManager
from core.interfaces.runner import CommandRunner
from core.services.classifier import classify

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, per-package results)."""

    on_start: Callable[[PackageRequest], None] | None = None
    on_result: Callable[[PackageResult], None] | None = None


def build_requests(
    package_list: PackageListFile,
    mode: InstallMode,
    *,
    skip_optional: bool = False,
) -> list[PackageRequest]:
    """Turn a package list into requests; the optional list is soft-fail."""

    requests = [
        PackageRequest(identifier=entry.id, display_name=entry.display_name, mode=mode, required=True)
        for entry in package_list.packages
    ]
    if not skip_optional:
        requests.extend(
            PackageRequest(identifier=entry.id, display_name=entry.display_name, mode=mode, required=False)
            for entry in package_list.optional
        )
    return requests


def run_package(
    request: PackageRequest,
    *,
    manager: PackageManager,
    runner: CommandRunner,
) -> PackageResult:
    command = manager.build_command(request)
    logger.debug("Running %s", " ".join(command))
    try:
        completed = runner.run(command)
    except OSError as exc:
        logger.warning("Could not start %s for %s: %s", manager.executable, request.identifier, exc)
        return PackageResult(
            display_name=request.display_name,
            identifier=request.identifier,
            outcome=Outcome.FAILED,
            exit_code=None,
            message=str(exc),
            required=request.required,
        )

    result = classify(completed.exit_code, completed.output, request, manager.vocabulary)
    logger.info("%s -> %s (exit %s)", request.identifier, result.outcome.value, completed.exit_code)
    return result


def run_batch(
    requests: Iterable[PackageRequest],
    *,
    manager: PackageManager,
    runner: CommandRunner,
    mode: InstallMode,
    hooks: PipelineHooks | None = None,
) -> RunSummary:
    hooks = hooks or PipelineHooks()
    summary = RunSummary(manager=manager.name, mode=mode)

    for request in requests:
        if hooks.on_start:
            hooks.on_start(request)
        result = run_package(request, manager=manager, runner=runner)
        summary.results.append(result)
        if hooks.on_result:
            hooks.on_result(result)

    if summary.failures:
        logger.warning(
            "%d of %d packages failed (%d required)",
            len(summary.failures),
            len(summary.results),
            len(summary.hard_failures),
        )
    return summary

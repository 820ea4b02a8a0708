"""Host environment bootstrap (Developer Mode, PATH refresh, execution policy).

Every step is a guarded single write: read the current value, write only
when it differs from the desired one, and report a ``StepResult``. Steps
never raise for OS-level failures; the result carries ``success=False``
and the detail instead.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Callable, Iterable, MutableMapping

from core.config import AppSettings
from core.domain.models import StepResult
from core.errors import EnvironmentStepError
from core.interfaces.runner import CommandRunner, RegistryAccessor

logger = logging.getLogger(__name__)

DEVELOPER_MODE_PATH = r"HKLM:\SOFTWARE\Microsoft\Windows\CurrentVersion\AppModelUnlock"
DEVELOPER_MODE_VALUE = "AllowDevelopmentWithoutDevLicense"
MACHINE_ENVIRONMENT_PATH = r"HKLM:\SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
USER_ENVIRONMENT_PATH = r"HKCU:\Environment"
PATH_VALUE = "Path"
EXECUTION_POLICY_SCOPE = "CurrentUser"


def merge_path_entries(*scopes: str | None) -> str:
    """Join PATH strings in order, dropping empty and repeated entries.

    Comparison ignores case and trailing separators, as Windows does.
    """

    seen: set[str] = set()
    merged: list[str] = []
    for scope in scopes:
        if not scope:
            continue
        for entry in scope.split(";"):
            cleaned = entry.strip()
            if not cleaned:
                continue
            key = cleaned.rstrip("\\/").lower()
            if key in seen:
                continue
            seen.add(key)
            merged.append(cleaned)
    return ";".join(merged)


def _powershell(command: str) -> list[str]:
    return ["powershell", "-NoProfile", "-NonInteractive", "-Command", command]


class EnvironmentBootstrapper:
    def __init__(
        self,
        settings: AppSettings,
        *,
        runner: CommandRunner,
        registry: RegistryAccessor,
        environ: MutableMapping[str, str] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        expand: Callable[[str], str] = os.path.expandvars,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._registry = registry
        self._environ = environ if environ is not None else os.environ
        self._sleep = sleep
        self._expand = expand

    # Developer Mode

    def developer_mode_enabled(self) -> bool:
        return self._registry.get_value(DEVELOPER_MODE_PATH, DEVELOPER_MODE_VALUE) == 1

    def ensure_developer_mode(self) -> StepResult:
        name = "Developer Mode"
        try:
            if self.developer_mode_enabled():
                return StepResult(name=name, success=True, changed=False, detail="Already enabled")
            self._registry.set_value(DEVELOPER_MODE_PATH, DEVELOPER_MODE_VALUE, 1)
        except (OSError, EnvironmentStepError) as exc:
            logger.error("Developer Mode write failed: %s", exc)
            return StepResult(name=name, success=False, detail=str(exc))
        return StepResult(name=name, success=True, changed=True, detail="Enabled")

    # PATH

    def persisted_path(self) -> str:
        """PATH rebuilt from the Machine scope followed by the User scope."""

        scopes: list[str | None] = []
        for key in (MACHINE_ENVIRONMENT_PATH, USER_ENVIRONMENT_PATH):
            value = self._registry.get_value(key, PATH_VALUE)
            scopes.append(self._expand(value) if isinstance(value, str) else None)
        return merge_path_entries(*scopes)

    def refresh_path(self) -> StepResult:
        name = "PATH refresh"
        try:
            desired = self.persisted_path()
        except (OSError, EnvironmentStepError) as exc:
            logger.error("Reading persisted PATH failed: %s", exc)
            return StepResult(name=name, success=False, detail=str(exc))

        if not desired:
            return StepResult(name=name, success=False, detail="Persisted PATH is empty")
        if self._environ.get("PATH") == desired:
            return StepResult(name=name, success=True, changed=False, detail="Already current")

        self._environ["PATH"] = desired
        logger.debug("PATH now has %d entries", desired.count(";") + 1)
        return StepResult(name=name, success=True, changed=True, detail="Rebuilt from Machine and User scopes")

    # Execution policy

    def current_execution_policy(self) -> str:
        completed = self._runner.run(_powershell(f"Get-ExecutionPolicy -Scope {EXECUTION_POLICY_SCOPE}"))
        if completed.exit_code != 0:
            raise EnvironmentStepError(f"Get-ExecutionPolicy failed: {completed.output.strip()}")
        return completed.output.strip()

    def ensure_execution_policy(self) -> StepResult:
        name = "Execution policy"
        desired = self._settings.execution_policy
        try:
            current = self.current_execution_policy()
            if current.lower() == desired.lower():
                return StepResult(name=name, success=True, changed=False, detail=current)
            completed = self._runner.run(
                _powershell(
                    f"Set-ExecutionPolicy -Scope {EXECUTION_POLICY_SCOPE} -ExecutionPolicy {desired} -Force"
                )
            )
        except (OSError, EnvironmentStepError) as exc:
            logger.error("Execution policy check failed: %s", exc)
            return StepResult(name=name, success=False, detail=str(exc))

        if completed.exit_code != 0:
            return StepResult(name=name, success=False, detail=completed.output.strip() or f"exit {completed.exit_code}")
        return StepResult(name=name, success=True, changed=True, detail=f"{current} -> {desired}")

    # Interpreter

    def interpreter_available(self, executable: str) -> bool:
        try:
            completed = self._runner.run([executable, "--version"])
        except OSError:
            return False
        return completed.exit_code == 0

    def wait_for_interpreter(self, executable: str | None = None) -> StepResult:
        """Poll a freshly installed interpreter, refreshing PATH between attempts."""

        executable = executable or self._settings.interpreter_executable
        name = f"Interpreter ({executable})"
        attempts = self._settings.interpreter_poll_attempts
        for attempt in range(1, attempts + 1):
            if self.interpreter_available(executable):
                return StepResult(name=name, success=True, detail=f"Available after {attempt} attempt(s)")
            logger.info("%s not available yet (%d/%d)", executable, attempt, attempts)
            if attempt < attempts:
                self.refresh_path()
                self._sleep(self._settings.interpreter_poll_interval_seconds)
        return StepResult(name=name, success=False, detail=f"Not available after {attempts} attempts")

    # Verification

    def verify(self, executables: Iterable[str] = ()) -> list[StepResult]:
        """Re-read every state without writing anything."""

        results: list[StepResult] = []
        try:
            enabled = self.developer_mode_enabled()
            results.append(
                StepResult(name="Developer Mode", success=enabled, detail="Enabled" if enabled else "Disabled")
            )
        except (OSError, EnvironmentStepError) as exc:
            results.append(StepResult(name="Developer Mode", success=False, detail=str(exc)))

        try:
            persisted = self.persisted_path()
            ok = bool(persisted) and self._environ.get("PATH") == persisted
            results.append(
                StepResult(name="PATH", success=ok, detail="Current" if ok else "Differs from Machine and User scopes")
            )
        except (OSError, EnvironmentStepError) as exc:
            results.append(StepResult(name="PATH", success=False, detail=str(exc)))

        try:
            current = self.current_execution_policy()
            ok = current.lower() == self._settings.execution_policy.lower()
            results.append(StepResult(name="Execution policy", success=ok, detail=current))
        except (OSError, EnvironmentStepError) as exc:
            results.append(StepResult(name="Execution policy", success=False, detail=str(exc)))

        for executable in executables:
            ok = self.interpreter_available(executable)
            results.append(
                StepResult(name=executable, success=ok, detail="Available" if ok else "Not found")
            )
        return results

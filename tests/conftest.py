"""Shared fixtures for the bootkit test suite."""

from __future__ import annotations

import os
from typing import Callable, Sequence

import pytest

from core.config import AppSettings
from core.domain.models import InstallMode, PackageEntry, PackageListFile, PackageRequest
from core.interfaces.runner import CommandResult


class FakeRunner:
    """Scripted `CommandRunner`: first matching token in argv decides the result."""

    def __init__(
        self,
        responses: dict[str, CommandResult | Exception] | None = None,
        default: CommandResult = CommandResult(exit_code=0, output=""),
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default
        self.calls: list[list[str]] = []

    def run(self, command: Sequence[str]) -> CommandResult:
        argv = list(command)
        self.calls.append(argv)
        for token, response in self.responses.items():
            if any(token in part for part in argv):
                if isinstance(response, Exception):
                    raise response
                return response
        return self.default


class FakeRegistry:
    """In-memory `RegistryAccessor` keyed by (path, value name)."""

    def __init__(self, values: dict[tuple[str, str], str | int] | None = None) -> None:
        self.values = dict(values or {})
        self.writes: list[tuple[str, str, str | int]] = []
        self.fail_writes: Exception | None = None

    def get_value(self, path: str, value_name: str) -> str | int | None:
        return self.values.get((path, value_name))

    def set_value(self, path: str, value_name: str, value: str | int) -> None:
        if self.fail_writes is not None:
            raise self.fail_writes
        self.writes.append((path, value_name, value))
        self.values[(path, value_name)] = value


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep real .env files and BOOTKIT_* variables out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for key in list(os.environ):
        if key.startswith("BOOTKIT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        interpreter_poll_attempts=3,
        interpreter_poll_interval_seconds=0,
    )


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def sample_list() -> PackageListFile:
    return PackageListFile(
        packages=[
            PackageEntry(id="Git.Git", name="Git"),
            PackageEntry(id="Python.Python.3.12", name="Python 3.12"),
        ],
        optional=[PackageEntry(id="Mozilla.Firefox", name="Firefox")],
    )


@pytest.fixture
def make_request() -> Callable[..., PackageRequest]:
    def _make(
        identifier: str = "Git.Git",
        mode: InstallMode = InstallMode.INSTALL,
        required: bool = True,
    ) -> PackageRequest:
        return PackageRequest(identifier=identifier, display_name=identifier, mode=mode, required=required)

    return _make

"""Factories for the host-facing adapters used by CLI commands.

Commands call these instead of instantiating adapters, so tests can swap in
fakes with a single monkeypatch.
"""

from __future__ import annotations

from adapters.process_runner import SubprocessRunner
from adapters.windows_registry import WindowsRegistryAccessor
from core.interfaces.runner import CommandRunner, RegistryAccessor


def build_runner() -> CommandRunner:
    return SubprocessRunner()


def build_registry() -> RegistryAccessor:
    return WindowsRegistryAccessor()

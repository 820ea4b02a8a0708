"""Test host precondition helpers and registry path parsing."""

import sys

import pytest

import adapters.host
from adapters.host import is_english_locale, require_elevation, require_executables
from adapters.windows_registry import WindowsRegistryAccessor, split_registry_path
from core.errors import EnvironmentStepError, MissingPrivilegeError, MissingToolError


class TestSplitRegistryPath:
    def test_powershell_style(self):
        assert split_registry_path(r"HKLM:\SOFTWARE\Microsoft") == ("HKLM", r"SOFTWARE\Microsoft")

    def test_forward_slashes_and_case(self):
        assert split_registry_path("hkcu:/Environment") == ("HKCU", "Environment")

    @pytest.mark.parametrize("path", [r"SOFTWARE\Microsoft", r"HKXX:\Foo"])
    def test_invalid(self, path):
        with pytest.raises(ValueError):
            split_registry_path(path)


@pytest.mark.skipif(sys.platform == "win32", reason="winreg is available on Windows")
def test_registry_accessor_unavailable_off_windows():
    with pytest.raises(EnvironmentStepError):
        WindowsRegistryAccessor()


class TestPreconditions:
    def test_require_elevation(self, monkeypatch):
        monkeypatch.setattr(adapters.host, "is_elevated", lambda: False)
        with pytest.raises(MissingPrivilegeError):
            require_elevation()

    def test_require_executables_names_missing_tool(self, monkeypatch):
        monkeypatch.setattr(adapters.host, "find_executable", lambda name: None if name == "choco" else name)
        with pytest.raises(MissingToolError) as excinfo:
            require_executables(["winget", "choco"])
        assert excinfo.value.executable == "choco"


@pytest.mark.parametrize("value, expected", [
    ("en_US", True),
    ("English_United States", True),
    (None, True),
    ("es_ES", False),
    ("German_Germany", False),
])
def test_is_english_locale(value, expected):
    assert is_english_locale(value) is expected

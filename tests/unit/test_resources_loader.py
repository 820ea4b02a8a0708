"""Test package list resolution and JSON loading."""

import json

import pytest

from adapters.package_lists import load_package_list
from core.config import AppSettings
from core.errors import ConfigError
from core.resources_loader import BUILTIN_LISTS, resolve_package_list


def _write_list(path, packages, optional=()):
    path.write_text(
        json.dumps({"packages": [{"id": p} for p in packages], "optional": [{"id": p} for p in optional]}),
        encoding="utf-8",
    )
    return path


class TestLoadPackageList:
    def test_valid_file(self, tmp_path):
        path = _write_list(tmp_path / "list.json", ["Git.Git"], ["Mozilla.Firefox"])
        package_list = load_package_list(path)
        assert [e.id for e in package_list.packages] == ["Git.Git"]
        assert [e.id for e in package_list.optional] == ["Mozilla.Firefox"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid package list"):
            load_package_list(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"packages": [{"id": ""}]}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_package_list(path)

    @pytest.mark.parametrize("entry", [{"id": "x" * 300}, {"id": "   "}, {"id": "Git.Git", "name": "n" * 300}])
    def test_entry_limits_match_requests(self, tmp_path, entry):
        path = tmp_path / "limits.json"
        path.write_text(json.dumps({"packages": [entry]}), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid package list"):
            load_package_list(path)

    def test_entry_whitespace_is_stripped(self, tmp_path):
        path = tmp_path / "padded.json"
        path.write_text(json.dumps({"packages": [{"id": " Git.Git ", "name": " Git "}]}), encoding="utf-8")
        entry = load_package_list(path).packages[0]
        assert (entry.id, entry.display_name) == ("Git.Git", "Git")


class TestResolvePackageList:
    def test_builtin_when_nothing_configured(self, settings):
        assert resolve_package_list("winget", settings=settings) is BUILTIN_LISTS["winget"]

    def test_explicit_path_wins(self, settings, tmp_path):
        path = _write_list(tmp_path / "mine.json", ["Neovim.Neovim"])
        package_list = resolve_package_list("winget", settings=settings, explicit_path=path)
        assert [e.id for e in package_list.packages] == ["Neovim.Neovim"]

    def test_configured_path(self, tmp_path):
        path = _write_list(tmp_path / "choco.json", ["jq"])
        settings = AppSettings(_env_file=None, choco_list_path=path)
        package_list = resolve_package_list("choco", settings=settings)
        assert [e.id for e in package_list.packages] == ["jq"]

    def test_cwd_default_file(self, settings, tmp_path):
        _write_list(tmp_path / "packages-choco.json", ["gsudo"])
        package_list = resolve_package_list("choco", settings=settings)
        assert [e.id for e in package_list.packages] == ["gsudo"]

    def test_missing_explicit_path_is_an_error(self, settings, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            resolve_package_list("winget", settings=settings, explicit_path=tmp_path / "nope.json")

    def test_unknown_manager(self, settings):
        with pytest.raises(ConfigError):
            resolve_package_list("scoop", settings=settings)

"""Test sequential batch runs and failure aggregation."""

from core.domain.models import InstallMode, Outcome
from core.interfaces.runner import CommandResult
from core.services.install_pipeline import PipelineHooks, build_requests, run_batch, run_package
from adapters.package_managers import ChocolateyManager, WingetManager


class TestBuildRequests:
    def test_primary_and_optional(self, sample_list):
        requests = build_requests(sample_list, InstallMode.INSTALL)
        assert [r.identifier for r in requests] == ["Git.Git", "Python.Python.3.12", "Mozilla.Firefox"]
        assert [r.required for r in requests] == [True, True, False]

    def test_skip_optional(self, sample_list):
        requests = build_requests(sample_list, InstallMode.UPGRADE, skip_optional=True)
        assert [r.identifier for r in requests] == ["Git.Git", "Python.Python.3.12"]
        assert all(r.mode is InstallMode.UPGRADE for r in requests)

    def test_display_name_falls_back_to_id(self, sample_list):
        sample_list.optional[0].name = None
        requests = build_requests(sample_list, InstallMode.INSTALL)
        assert requests[-1].display_name == "Mozilla.Firefox"


class TestRunPackage:
    def test_runner_os_error_becomes_failed_result(self, fake_runner, make_request):
        fake_runner.responses["winget"] = FileNotFoundError("winget")
        result = run_package(make_request(), manager=WingetManager(), runner=fake_runner)
        assert result.outcome is Outcome.FAILED
        assert result.exit_code is None
        assert "winget" in result.message


class TestRunBatch:
    def test_runs_in_order_and_continues_after_failure(self, fake_runner, sample_list):
        fake_runner.responses["Git.Git"] = CommandResult(1, "Installer hash does not match.")
        requests = build_requests(sample_list, InstallMode.INSTALL)

        summary = run_batch(requests, manager=WingetManager(), runner=fake_runner, mode=InstallMode.INSTALL)

        assert [call[3] for call in fake_runner.calls] == ["Git.Git", "Python.Python.3.12", "Mozilla.Firefox"]
        assert [r.outcome for r in summary.results] == [Outcome.FAILED, Outcome.INSTALLED, Outcome.INSTALLED]
        assert [r.display_name for r in summary.failures] == ["Git"]
        assert summary.exit_code == 1

    def test_optional_failure_is_soft(self, fake_runner, sample_list):
        fake_runner.responses["Mozilla.Firefox"] = CommandResult(1, "boom")
        requests = build_requests(sample_list, InstallMode.INSTALL)

        summary = run_batch(requests, manager=WingetManager(), runner=fake_runner, mode=InstallMode.INSTALL)

        assert len(summary.failures) == 1
        assert summary.hard_failures == []
        assert summary.exit_code == 0

    def test_second_run_is_already_current(self, fake_runner, sample_list):
        requests = build_requests(sample_list, InstallMode.INSTALL)
        first = run_batch(requests, manager=WingetManager(), runner=fake_runner, mode=InstallMode.INSTALL)
        assert first.count(Outcome.INSTALLED) == 3

        fake_runner.default = CommandResult(
            -1978335135,
            "Found an existing package already installed. Trying to upgrade the installed package...",
        )
        second = run_batch(requests, manager=WingetManager(), runner=fake_runner, mode=InstallMode.INSTALL)

        assert all(r.outcome is Outcome.ALREADY_CURRENT for r in second.results)
        assert second.failures == []
        assert second.exit_code == 0

    def test_hooks_are_called_per_package(self, fake_runner, sample_list):
        started, finished = [], []
        hooks = PipelineHooks(on_start=started.append, on_result=finished.append)
        requests = build_requests(sample_list, InstallMode.INSTALL, skip_optional=True)

        run_batch(requests, manager=ChocolateyManager(), runner=fake_runner, mode=InstallMode.INSTALL, hooks=hooks)

        assert [r.identifier for r in started] == ["Git.Git", "Python.Python.3.12"]
        assert [r.identifier for r in finished] == ["Git.Git", "Python.Python.3.12"]

    def test_empty_batch(self, fake_runner):
        summary = run_batch([], manager=WingetManager(), runner=fake_runner, mode=InstallMode.UPGRADE)
        assert summary.results == []
        assert summary.exit_code == 0
        assert summary.manager == "winget"

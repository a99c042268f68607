import logging
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

import prismreport.cli.report as report_mod
from fixtures.prism_payloads import report_row
from prismreport import __version__
from prismreport.cli import app
from prismreport.models.cluster import TargetInstance
from prismreport.models.run import RunFailure, RunResult, RunState

runner = CliRunner()


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setattr(report_mod.config, "PRISM_USERNAME", "admin")
    monkeypatch.setattr(report_mod.config, "PRISM_PASSWORD", "secret")


@pytest.fixture
def coordinator(monkeypatch):
    coordinator = MagicMock()
    coordinator.run.return_value = RunResult(
        state=RunState.DONE, rows=[report_row()], output_path="/tmp/prism-report-20261018-142501.xlsx"
    )
    monkeypatch.setattr(report_mod, "get_coordinator", lambda client: coordinator)
    return coordinator


@pytest.fixture
def http_client(monkeypatch):
    factory = MagicMock()
    monkeypatch.setattr(report_mod, "get_http_client", factory)
    return factory


@pytest.fixture
def reporter(monkeypatch):
    reporter = MagicMock()
    monkeypatch.setattr(report_mod, "ConsoleReporter", lambda: reporter)
    return reporter


def test_report_polls_targets_and_prints_table(credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["report", "--target", "pc1.example.com", "--target", "pc2.example.com"])

    assert result.exit_code == 0
    targets = coordinator.run.call_args.args[0]
    assert targets == [TargetInstance(address="pc1.example.com"), TargetInstance(address="pc2.example.com")]
    assert coordinator.run.call_args.kwargs["exporter"].EXTENSION == "xlsx"
    http_client.assert_called_once_with("admin", "secret")
    reporter.report.assert_called_once_with(data=coordinator.run.return_value.rows)
    assert "Report exported to: /tmp/prism-report-20261018-142501.xlsx" in result.output


def test_report_reads_targets_file(tmp_path, credentials, coordinator, http_client, reporter):
    targets_file = tmp_path / "targets.csv"
    targets_file.write_text(
        "Site,Prism Central VIP\nparis,10.1.0.5\nlyon,\nparis-dup,10.1.0.5\nnantes,10.2.0.5\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["report", "--targets", str(targets_file), "--output", "csv"])

    assert result.exit_code == 0
    assert [t.address for t in coordinator.run.call_args.args[0]] == ["10.1.0.5", "10.2.0.5"]
    assert coordinator.run.call_args.kwargs["exporter"].EXTENSION == "csv"


def test_report_with_output_path(tmp_path, credentials, coordinator, http_client, reporter):
    out = tmp_path / "fleet.json"

    result = runner.invoke(app, ["report", "--target", "pc1", "--output", "JSON", "--output-path", str(out)])

    assert result.exit_code == 0
    assert coordinator.run.call_args.kwargs["output_path"] == out
    assert coordinator.run.call_args.kwargs["exporter"].EXTENSION == "json"


def test_report_quiet_skips_table(credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["report", "--target", "pc1", "--quiet"])

    assert result.exit_code == 0
    reporter.report.assert_not_called()


def test_report_failure_exits_non_zero(credentials, coordinator, http_client, reporter):
    failure = RunFailure(address="pc1", stage="storage:beta", error_type="StorageQueryError", message="timed out")
    coordinator.run.return_value = RunResult(state=RunState.FAILED, failure=failure)

    result = runner.invoke(app, ["report", "--target", "pc1"])

    assert result.exit_code == 1
    reporter.report_failure.assert_called_once_with(failure)
    reporter.report.assert_not_called()
    assert "Report exported to" not in result.output


def test_report_invalid_output_format(credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["report", "--target", "pc1", "--output", "pdf"])

    assert result.exit_code != 0
    coordinator.run.assert_not_called()


def test_report_missing_targets_file(tmp_path, credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["report", "--targets", str(tmp_path / "nope.csv")])

    assert result.exit_code == 1
    coordinator.run.assert_not_called()


def test_report_targets_file_without_column(tmp_path, credentials, coordinator, http_client, reporter):
    targets_file = tmp_path / "targets.csv"
    targets_file.write_text("host\n10.1.0.5\n", encoding="utf-8")

    result = runner.invoke(app, ["report", "--targets", str(targets_file)])

    assert result.exit_code == 1
    coordinator.run.assert_not_called()


def test_report_prompts_for_missing_credentials(monkeypatch, coordinator, http_client, reporter):
    monkeypatch.setattr(report_mod.config, "PRISM_USERNAME", None)
    monkeypatch.setattr(report_mod.config, "PRISM_PASSWORD", None)

    result = runner.invoke(app, ["report", "--target", "pc1"], input="operator\nhunter2\n")

    assert result.exit_code == 0
    http_client.assert_called_once_with("operator", "hunter2")


def test_report_username_option_overrides_config(credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["report", "--target", "pc1", "-u", "auditor"])

    assert result.exit_code == 0
    http_client.assert_called_once_with("auditor", "secret")


def test_version_command():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"prismreport version: {__version__}" in result.output


def test_version_option():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_log_level_option_is_validated(credentials, coordinator, http_client, reporter):
    result = runner.invoke(app, ["--log-level", "chatty", "report", "--target", "pc1"])

    assert result.exit_code != 0
    coordinator.run.assert_not_called()


def test_log_level_option_reconfigures_logging(mocker, credentials, coordinator, http_client, reporter):
    basic_config = mocker.patch("prismreport.cli.main.logging.basicConfig")

    result = runner.invoke(app, ["--log-level", "debug", "report", "--target", "pc1"])

    assert result.exit_code == 0
    assert basic_config.call_args.kwargs["level"] == logging.DEBUG
    assert basic_config.call_args.kwargs["force"] is True

"""End-to-end CLI coverage for the commands exposed by lib_context_log."""

from __future__ import annotations

import json

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_context_log import cli
from lib_context_log.testing import parse_line


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_levels_outputs_table() -> None:
    result = _runner().invoke(cli.cli, ["levels"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["DEBUG"] == 0
    assert payload["NONE"] == 100


def test_cli_emit_prints_line() -> None:
    result = _runner().invoke(
        cli.cli,
        ["emit", "info", "ready", "--event", "boot", "--tag", "port=8080", "--tag", "host=a"],
    )
    assert result.exit_code == 0
    assert parse_line(result.output.strip()) == {
        "level": "info",
        "message": "ready",
        "event": "boot",
        "port": "8080",
        "host": "a",
    }


def test_cli_emit_respects_threshold() -> None:
    result = _runner().invoke(cli.cli, ["emit", "debug", "quiet", "--threshold", "info"])
    assert result.exit_code == 0
    assert result.output == ""


def test_cli_emit_forwards_metrics_with_prefix() -> None:
    result = _runner().invoke(
        cli.cli,
        [
            "emit",
            "metric",
            "tick",
            "--counter",
            "hits",
            "--full",
            "latency=12.5",
            "--metric-tag",
            "team=core",
            "--prefix",
            "svc",
            "--environment",
            "prod",
        ],
    )
    assert result.exit_code == 0
    first_line, _, rest = result.output.partition("\n")
    assert parse_line(first_line)["latency"] == "12.5"
    calls = json.loads(rest)
    assert [(c["method"], c["name"]) for c in calls] == [
        ("record_simple_metric", "svc.hits"),
        ("record_full_metric", "svc.latency"),
    ]
    assert calls[0]["tags"] == ["cluster:prod", "team:core"]


def test_cli_emit_rejects_malformed_pairs() -> None:
    result = _runner().invoke(cli.cli, ["emit", "info", "x", "--tag", "novalue"])
    assert result.exit_code != 0


def test_cli_emit_rejects_unknown_threshold() -> None:
    result = _runner().invoke(cli.cli, ["emit", "info", "x", "--threshold", "loud"])
    assert result.exit_code != 0


def test_cli_emit_rejects_non_numeric_full_metric() -> None:
    result = _runner().invoke(cli.cli, ["emit", "info", "x", "--full", "latency=fast"])
    assert result.exit_code != 0


def test_cli_info_runs() -> None:
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "lib_context_log" in result.output


def test_main_restores_traceback_flag() -> None:
    lib_cli_exit_tools.config.traceback = False
    code = cli.main(["--traceback", "levels"])
    assert code == 0
    assert lib_cli_exit_tools.config.traceback is False

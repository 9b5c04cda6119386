from __future__ import annotations

from lib_context_log.adapters.backends.recording import RecordingBackend
from lib_context_log.testing import capture_logger, parse_line


def test_parse_line_reads_fragments() -> None:
    assert parse_line("[level:info][message:a b][n:1]") == {"level": "info", "message": "a b", "n": "1"}
    assert parse_line("") == {}


def test_capture_logger_collects_lines_and_backend() -> None:
    captured = capture_logger(prefix="svc", environment="ci")
    assert isinstance(captured.backend, RecordingBackend)
    assert captured.logger.settings.push_metrics
    assert captured.logger.settings.default_tags == {"cluster": "ci"}
    captured.context.info("one")
    captured.context.debug("two")
    assert [line["message"] for line in captured.lines()] == ["one", "two"]


def test_capture_logger_without_prefix_keeps_forwarding_off() -> None:
    assert not capture_logger().logger.settings.push_metrics

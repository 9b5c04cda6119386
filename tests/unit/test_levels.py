"""Level table lookups and the severity gate."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_context_log.domain import levels
from lib_context_log.domain.errors import ConfigurationError
from lib_context_log.testing import capture_logger

VERBS = {
    "trace": levels.TRACE,
    "debug": levels.DEBUG,
    "info": levels.INFO,
    "metric": levels.METRIC,
    "warn": levels.WARN,
    "error": levels.ERROR,
    "critic": levels.CRITIC,
}


def test_total_order() -> None:
    assert levels.TRACE < levels.DEBUG < levels.INFO < levels.WARN < levels.ERROR < levels.NONE
    assert levels.ERROR == levels.CRITIC == levels.FATAL
    assert levels.METRIC == levels.INFO


@pytest.mark.parametrize("name", ["TRACE", "DEBUG", "INFO", "WARN", "ERROR", "CRITIC", "FATAL", "NONE"])
def test_every_named_level_resolves(name: str) -> None:
    assert levels.level_by_name(name) == levels.LEVEL_NAMES[name]
    assert levels.level_by_name(name.lower()) == levels.LEVEL_NAMES[name]


def test_unknown_name_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid log level: verbose"):
        levels.level_by_name("verbose")


def test_is_enabled_boundary() -> None:
    assert levels.is_enabled(levels.INFO, levels.INFO)
    assert not levels.is_enabled(levels.WARN, levels.INFO)


@given(st.sampled_from(sorted(VERBS)), st.sampled_from(sorted(levels.LEVEL_NAMES.values())))
def test_verb_emits_iff_threshold_not_above_its_severity(verb, threshold) -> None:
    captured = capture_logger(threshold)
    getattr(captured.context, verb)("x")
    emitted = len(captured.lines())
    assert emitted == (1 if threshold <= VERBS[verb] else 0)

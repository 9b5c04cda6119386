from __future__ import annotations

from lib_context_log.domain.errors import (
    BackendError,
    ConfigurationError,
    ContractViolation,
    DispatchError,
    FatalError,
    LogContextError,
    LoggedError,
)


def test_error_hierarchy() -> None:
    assert issubclass(ConfigurationError, FatalError)
    assert issubclass(ContractViolation, FatalError)
    assert issubclass(FatalError, LogContextError)
    assert not issubclass(DispatchError, FatalError)
    assert not issubclass(BackendError, FatalError)
    for exception in (DispatchError(""), BackendError(""), LoggedError(""), ConfigurationError("")):
        assert isinstance(exception, LogContextError)

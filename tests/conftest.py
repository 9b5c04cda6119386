from __future__ import annotations

from collections.abc import Iterator

import pytest

from lib_context_log.core import default_logger
from lib_context_log.testing import CapturedLogger, capture_logger


@pytest.fixture()
def restore_default_logger() -> Iterator[None]:
    """Put the process-wide logger's settings and backend back after the test."""

    logger = default_logger()
    settings, backend = logger.settings, logger.backend
    yield
    logger.configure(settings, backend=backend)


@pytest.fixture()
def captured() -> CapturedLogger:
    """Isolated logger at TRACE with forwarding enabled under ``svc``."""

    return capture_logger(prefix="svc", environment="test")

"""Shared fixtures: isolate settings and logging between tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from callbags.foundation.config import clear_settings_cache
from callbags.foundation.logging import MemoryRenderer, configure_logging, reset_logging


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("CALLBAGS_DEBUG", "CALLBAGS_LOG_LEVEL", "CALLBAGS_LOG_FORMAT",
                 "CALLBAGS_PROTOCOL_LOG_VIOLATIONS", "CALLBAGS_PROTOCOL_LOG_LIFECYCLE"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def log_entries() -> MemoryRenderer:
    """Capture every log entry at debug level."""
    return configure_logging(level="DEBUG", renderer=MemoryRenderer())  # type: ignore[return-value]

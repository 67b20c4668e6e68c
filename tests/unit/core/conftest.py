"""Fixtures shared by the core unit tests."""

from collections.abc import Generator

import pytest

from bggapi.core import logging as bgg_logging
from bggapi.core.config import Settings
from bggapi.core.logging import _LoggingState


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide a real Settings object built from test environment values.

    Returns:
        Settings: Settings with test defaults.
    """
    monkeypatch.setenv("BGG_APP_NAME", "TestApp")
    monkeypatch.setenv("BGG_APP_VERSION", "1.0.0")
    monkeypatch.setenv("BGG_ENVIRONMENT", "development")
    monkeypatch.setenv("BGG_DEBUG", "false")

    return Settings()


@pytest.fixture
def isolated_logging_state(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[_LoggingState]:
    """Swap the module logging state for a fresh one during the test."""
    state = _LoggingState()
    monkeypatch.setattr(bgg_logging, "_state", state)
    yield state

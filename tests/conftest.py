"""Shared fixtures for the search pipeline and controller tests."""

from __future__ import annotations

import pytest
import structlog
from helpers import RecordingNavigator

from console_search.config import InteractionSettings, SearchSettings


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(
        interaction=InteractionSettings(debounce_ms=0, no_results_flash_ms=10)
    )


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()

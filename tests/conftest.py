"""Shared pytest fixtures for the full novelprint test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_paths import (
    sample_episode_fixture_path as resolve_sample_episode_fixture_path,
)

PAGE_BREAK = '<div style="page-break-after: always;"></div>'


@pytest.fixture
def sample_episode_fixture_path() -> Path:
    """Provide the markdown episode fixture path for tests that need a real file."""

    return resolve_sample_episode_fixture_path()


@pytest.fixture
def page_break() -> str:
    """Provide a canonical page-break marker element."""

    return PAGE_BREAK

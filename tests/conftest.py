"""Shared pytest fixtures for mathexpr tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from mathexpr.config import get_settings
from mathexpr.expression import clear_cache


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterator[None]:
    """Reset process settings and the compile cache around every test."""
    get_settings.cache_clear()
    clear_cache()
    yield
    get_settings.cache_clear()
    clear_cache()

"""Shared pytest fixtures for Textus tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from textus.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate each test from RENDER__/LOG__ variables and the settings cache."""
    for key in list(os.environ):
        if key.startswith(("RENDER__", "LOG__")):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

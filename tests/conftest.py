"""
Shared pytest fixtures for passgen tests.
"""

from __future__ import annotations

import os
from typing import Iterable, List

import pytest

from passgen.config import get_settings


class ScriptedSource:
    """RandomSource that replays fixed bytes and integers."""

    def __init__(self, data: Iterable[int] = (), ints: Iterable[int] = ()):
        self._data = bytes(data)
        self._ints: List[int] = list(ints)
        self.bounds: List[int] = []

    def fill(self, n: int) -> bytes:
        chunk, self._data = self._data[:n], self._data[n:]
        return chunk

    def next_int(self, bound: int) -> int:
        self.bounds.append(bound)
        value = self._ints.pop(0)
        assert 0 <= value < bound
        return value


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from PASSGEN_* variables in the environment."""
    for key in list(os.environ):
        if key.startswith("PASSGEN_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


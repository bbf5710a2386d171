"""
Cryptographically strong randomness for the generators.

Every generator takes a ``RandomSource`` so tests can hand in a scripted one.
``SystemRandomSource`` is the only production implementation; it reads the OS
CSPRNG through ``secrets`` and never falls back to ``random``.
"""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

from .errors import RandomSourceError


@runtime_checkable
class RandomSource(Protocol):
    def fill(self, n: int) -> bytes:
        """Return exactly ``n`` uniformly random bytes."""
        ...

    def next_int(self, bound: int) -> int:
        """Return a uniform integer in ``[0, bound)``."""
        ...


class SystemRandomSource:
    """OS-backed source (``getrandom``/``CryptGenRandom`` via ``secrets``)."""

    def fill(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("byte count must be non-negative")
        try:
            data = secrets.token_bytes(n)
        except (NotImplementedError, OSError) as exc:
            raise RandomSourceError("no secure random source available") from exc
        if len(data) != n:
            raise RandomSourceError(f"short read from random source ({len(data)} of {n} bytes)")
        return data

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError("bound must be positive")
        try:
            # randbelow rejects out-of-range draws, so the result is exactly uniform
            return secrets.randbelow(bound)
        except (NotImplementedError, OSError) as exc:
            raise RandomSourceError("no secure random source available") from exc


_default: SystemRandomSource | None = None


def default_source() -> SystemRandomSource:
    global _default
    if _default is None:
        _default = SystemRandomSource()
    return _default

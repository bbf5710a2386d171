from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import PolicyError
from .policy import GenerationPolicy

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
SIMILAR_CHARS = "il1Lo0O"


@dataclass(frozen=True, slots=True)
class Charset:
    chars: str
    # One pool per selected class, in lowercase/uppercase/digits/symbols order
    pools: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.chars)


def _strip_similar(chars: str) -> str:
    return "".join(c for c in chars if c not in SIMILAR_CHARS)


# Resolve the class flags of a policy into the sampling charset and its coverage pools
def build_charset(policy: GenerationPolicy) -> Charset:
    selected = [
        pool
        for flag, pool in (
            (policy.lowercase, LOWERCASE),
            (policy.uppercase, UPPERCASE),
            (policy.digits, DIGITS),
            (policy.symbols, SYMBOLS),
        )
        if flag
    ]
    if policy.exclude_similar:
        selected = [_strip_similar(pool) for pool in selected]

    chars = "".join(selected)
    if not chars:
        raise PolicyError("Please select at least one character type.")
    return Charset(chars=chars, pools=tuple(pool for pool in selected if pool))

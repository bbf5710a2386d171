"""
Entropy and crack-time estimates.

Random mode:   bits = length * log2(|charset|)
Readable mode: bits = word_count * log2(|word list|)
               + 1 bit per word when words are capitalised
               + log2(999) when a number is appended

The readable-mode additions are rough approximations: capitalisation is always
applied to the first letter, so it does not really add a binary choice per word.
They are kept as is so estimates stay comparable across versions.

Crack time assumes an attacker searches ``median_factor`` of the space on
average, at a fixed guess rate.

>>> estimate(GenerationPolicy(length=16)).rounded_bits
103
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .charset import build_charset
from .config import get_settings
from .errors import PolicyError
from .generator import MAX_APPENDED_NUMBER, GeneratedCredential
from .policy import GenerationPolicy, Mode
from .wordlists import get_word_list

# (divisor to reach the next unit, label of the current unit)
_UNITS = (
    (60, "s"),
    (60, "m"),
    (24, "h"),
    (365, "d"),
    (math.inf, "y"),
)


@dataclass(frozen=True, slots=True)
class EntropyEstimate:
    bits: float
    online_seconds: float
    offline_seconds: float

    @property
    def rounded_bits(self) -> int:
        return round(self.bits)

    @property
    def online(self) -> str:
        return format_duration(self.online_seconds)

    @property
    def offline(self) -> str:
        return format_duration(self.offline_seconds)


# Render seconds in the largest unit reached by the s/m/h/d/y cascade
def format_duration(seconds: float) -> str:
    if not math.isfinite(seconds) or seconds <= 0:
        return "instant"
    value = seconds
    label = _UNITS[0][1]
    idx = 0
    while idx < len(_UNITS) - 1 and value >= _UNITS[idx][0]:
        value /= _UNITS[idx][0]
        idx += 1
        label = _UNITS[idx][1]
    return f"{value:.1f}{label}"


def entropy_bits(policy: GenerationPolicy, word_list_size: int | None = None) -> float:
    if policy.mode is Mode.RANDOM:
        try:
            size = len(build_charset(policy))
        except PolicyError:
            size = 1
        return policy.length * math.log2(size)

    if word_list_size is None:
        word_list_size = len(get_word_list(policy.word_list))
    bits = policy.word_count * math.log2(max(1, word_list_size))
    if policy.capitalize_words:
        bits += policy.word_count * 1.0
    if policy.append_number:
        bits += math.log2(MAX_APPENDED_NUMBER)
    return bits


def _guesses(bits: float) -> float:
    try:
        return math.pow(2.0, bits)
    except OverflowError:
        return math.inf


def estimate(
    policy: GenerationPolicy,
    word_list_size: int | None = None,
    online_rate: float | None = None,
    offline_rate: float | None = None,
) -> EntropyEstimate:
    settings = get_settings()
    online_rate = online_rate or settings.online_rate
    offline_rate = offline_rate or settings.offline_rate

    bits = entropy_bits(policy, word_list_size)
    expected = _guesses(bits) * settings.median_factor
    return EntropyEstimate(
        bits=bits,
        online_seconds=expected / online_rate,
        offline_seconds=expected / offline_rate,
    )


def estimate_credential(credential: GeneratedCredential, **rates: float) -> EntropyEstimate:
    return estimate(credential.policy, credential.word_list_size, **rates)

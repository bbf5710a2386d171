from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass
from typing import Dict

from zxcvbn import zxcvbn as _zx

from .policy import GenerationPolicy, Mode

_LOWER = re.compile(r"[a-z]")
_UPPER = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_OTHER = re.compile(r"[^A-Za-z0-9]")


class StrengthLabel(str, enum.Enum):
    NONE = "None"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


@dataclass(frozen=True, slots=True)
class StrengthScore:
    score: int
    label: StrengthLabel


def _bucket(score: int) -> StrengthLabel:
    if score <= 2:
        return StrengthLabel.WEAK
    if score <= 4:
        return StrengthLabel.MEDIUM
    return StrengthLabel.STRONG


# Coarse 0-6 rule score; independent of the entropy estimate, and the two may disagree
def score(policy: GenerationPolicy, value: str) -> StrengthScore:
    if not value:
        return StrengthScore(0, StrengthLabel.NONE)

    points = 0
    if policy.mode is Mode.READABLE:
        if len(value) >= 12:
            points += 2
        if len(value) >= 20:
            points += 1
        if policy.word_count >= 4:
            points += 1
        if policy.append_number:
            points += 1
        if policy.capitalize_words:
            points += 1
    else:
        # Classes are read off the output, not the policy flags
        if len(value) >= 8:
            points += 1
        if len(value) >= 12:
            points += 1
        for pattern in (_LOWER, _UPPER, _DIGIT, _OTHER):
            if pattern.search(value):
                points += 1

    return StrengthScore(points, _bucket(points))


# zxcvbn refuses very long input, so only the leading part is analysed
ZXCVBN_MAX_LENGTH = 72


# Analyse the value using zxcvbn
def analyse(value: str) -> Dict:
    return _zx(value[:ZXCVBN_MAX_LENGTH])


# zxcvbn's guess count expressed in bits
def zxcvbn_bits(info: Dict) -> float:
    return float(info["guesses_log10"]) * math.log2(10)

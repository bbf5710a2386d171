from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .errors import PolicyError

MIN_LENGTH, MAX_LENGTH = 4, 128
MIN_WORDS, MAX_WORDS = 2, 8

# Separator choices offered for readable passwords; "none" joins words directly
SEPARATORS: Dict[str, str] = {
    "-": "-",
    "_": "_",
    ".": ".",
    " ": " ",
    "none": "",
}


class Mode(str, enum.Enum):
    RANDOM = "random"
    READABLE = "readable"


# Immutable description of how a credential should be generated
@dataclass(frozen=True, slots=True)
class GenerationPolicy:
    mode: Mode = Mode.RANDOM
    length: int = 16
    lowercase: bool = True
    uppercase: bool = True
    digits: bool = True
    symbols: bool = True
    exclude_similar: bool = False
    require_coverage: bool = True
    word_list: str = "common"
    word_count: int = 4
    separator: str = "-"
    capitalize_words: bool = True
    append_number: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "mode", Mode(self.mode))
        except ValueError:
            raise PolicyError(f"Unknown mode: {self.mode!r}") from None
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise PolicyError("length must be an integer")
        if not MIN_LENGTH <= self.length <= MAX_LENGTH:
            raise PolicyError(f"length must be between {MIN_LENGTH} and {MAX_LENGTH}")
        if isinstance(self.word_count, bool) or not isinstance(self.word_count, int):
            raise PolicyError("word count must be an integer")
        if not MIN_WORDS <= self.word_count <= MAX_WORDS:
            raise PolicyError(f"word count must be between {MIN_WORDS} and {MAX_WORDS}")
        if self.separator not in SEPARATORS:
            raise PolicyError(f"Unknown separator: {self.separator!r}")

    # Separator as it appears in the output
    def joiner(self) -> str:
        return SEPARATORS[self.separator]

    def selected_classes(self) -> int:
        return sum((self.lowercase, self.uppercase, self.digits, self.symbols))


# Presets tighten the current policy rather than replacing it wholesale
def apply_preset(policy: GenerationPolicy, key: str) -> GenerationPolicy:
    if key == "custom":
        return policy
    if key == "nist-strong":
        return dataclasses.replace(
            policy,
            mode=Mode.RANDOM,
            length=max(policy.length, 16),
            lowercase=True,
            uppercase=True,
            digits=True,
            symbols=True,
            exclude_similar=False,
            require_coverage=True,
        )
    if key == "no-symbols-16":
        return dataclasses.replace(
            policy,
            mode=Mode.RANDOM,
            length=max(policy.length, 16),
            lowercase=True,
            uppercase=True,
            digits=True,
            symbols=False,
            require_coverage=True,
        )
    if key == "passphrase-4w":
        return dataclasses.replace(
            policy,
            mode=Mode.READABLE,
            word_count=max(policy.word_count, 4),
            separator="-",
            capitalize_words=True,
            append_number=True,
        )
    raise PolicyError(f"Unknown preset: {key!r}")


PRESETS = ("custom", "nist-strong", "no-symbols-16", "passphrase-4w")


# Human-readable reasons a policy falls short of common password guidance
def compliance_issues(policy: GenerationPolicy) -> List[str]:
    issues: List[str] = []
    if policy.mode is Mode.RANDOM:
        if policy.length < 12:
            issues.append("Length under 12")
        if policy.selected_classes() < 3:
            issues.append("Use at least 3 character types")
        if not policy.require_coverage:
            issues.append("Enable guaranteed coverage")
    else:
        if policy.word_count < 4:
            issues.append("Use ≥ 4 words")
        if not policy.append_number:
            issues.append("Add a number to increase entropy")
    return issues


# Share-link parameters: short key -> policy field
_BOOL_PARAMS = {
    "ul": "lowercase",
    "uu": "uppercase",
    "un": "digits",
    "us": "symbols",
    "xs": "exclude_similar",
    "cap": "capitalize_words",
    "num": "append_number",
    "cov": "require_coverage",
}


def policy_to_query(policy: GenerationPolicy) -> Dict[str, str]:
    params = {
        "type": policy.mode.value,
        "length": str(policy.length),
        "wc": str(policy.word_count),
        "sep": policy.separator,
    }
    for key, field in _BOOL_PARAMS.items():
        params[key] = "true" if getattr(policy, field) else "false"
    return params


def _positive_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value or None


# Overlay share-link parameters on a base policy; unrecognised values keep the base
def policy_from_query(
    params: Mapping[str, str], base: GenerationPolicy | None = None
) -> GenerationPolicy:
    base = base or GenerationPolicy()
    changes: Dict[str, object] = {}

    if params.get("type"):
        changes["mode"] = params["type"]
    length = _positive_int(params.get("length"))
    if length is not None:
        changes["length"] = length
    word_count = _positive_int(params.get("wc"))
    if word_count is not None:
        changes["word_count"] = word_count
    if "sep" in params:
        changes["separator"] = params["sep"]

    for key, field in _BOOL_PARAMS.items():
        raw = params.get(key)
        if raw == "true":
            changes[field] = True
        elif raw == "false":
            changes[field] = False

    return dataclasses.replace(base, **changes)

"""Password and passphrase generation with entropy estimates and breach lookup."""

from .breach import BreachChecker, BreachMonitor, BreachResult, BreachState, sha1_hex
from .charset import Charset, build_charset
from .entropy import EntropyEstimate, estimate, estimate_credential, format_duration
from .errors import (
    BreachNetworkError,
    BreachResponseError,
    PassgenError,
    PolicyError,
    RandomSourceError,
)
from .generator import GeneratedCredential, generate, generate_bulk
from .policy import GenerationPolicy, Mode, apply_preset, compliance_issues
from .randomness import RandomSource, SystemRandomSource
from .strength import StrengthLabel, StrengthScore, score
from .wordlists import WORD_LISTS, WordList, get_word_list

__version__ = "0.1.0"

__all__ = [
    "BreachChecker",
    "BreachMonitor",
    "BreachNetworkError",
    "BreachResponseError",
    "BreachResult",
    "BreachState",
    "Charset",
    "EntropyEstimate",
    "GeneratedCredential",
    "GenerationPolicy",
    "Mode",
    "PassgenError",
    "PolicyError",
    "RandomSource",
    "RandomSourceError",
    "StrengthLabel",
    "StrengthScore",
    "SystemRandomSource",
    "WORD_LISTS",
    "WordList",
    "apply_preset",
    "build_charset",
    "compliance_issues",
    "estimate",
    "estimate_credential",
    "format_duration",
    "generate",
    "generate_bulk",
    "get_word_list",
    "score",
    "sha1_hex",
]

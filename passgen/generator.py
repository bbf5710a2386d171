"""
Credential generation.

Random mode samples from the policy's charset with optional per-class coverage,
then shuffles. Readable mode draws words from a ``WordList``. Both are pure
functions of (policy, word list, random stream): the same bytes from the
``RandomSource`` always give the same credential.

Random mode reduces raw bytes with ``byte % size``. For the pool sizes used
here (at most 88 characters) the resulting bias is small but nonzero; it is
kept so that outputs stay reproducible from a byte stream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import structlog

from .charset import build_charset
from .config import get_settings
from .errors import PolicyError, RandomSourceError
from .policy import GenerationPolicy, Mode
from .randomness import RandomSource, default_source
from .wordlists import WordList, get_word_list

logger = structlog.get_logger(__name__)

MAX_APPENDED_NUMBER = 999


# A generated value plus the policy that produced it, for later re-scoring
@dataclass(frozen=True, slots=True)
class GeneratedCredential:
    value: str
    policy: GenerationPolicy
    word_list_size: int | None = None

    @property
    def mode(self) -> Mode:
        return self.policy.mode

    @property
    def length(self) -> int | None:
        return self.policy.length if self.policy.mode is Mode.RANDOM else None

    @property
    def word_count(self) -> int | None:
        return self.policy.word_count if self.policy.mode is Mode.READABLE else None


def _draw(source: RandomSource, n: int) -> bytes:
    data = source.fill(n)
    if len(data) != n:
        raise RandomSourceError(f"random source returned {len(data)} bytes, expected {n}")
    return data


# Fixed-length password from the policy charset
def generate_random(policy: GenerationPolicy, source: RandomSource | None = None) -> str:
    source = source or default_source()
    charset = build_charset(policy)
    pools = charset.pools if policy.require_coverage else ()
    length = policy.length

    data = _draw(source, length)
    chars: List[str] = []

    # Leading positions take one character from each selected class
    for i in range(min(len(pools), length)):
        pool = pools[i]
        chars.append(pool[data[i] % len(pool)])
    for i in range(len(chars), length):
        chars.append(charset.chars[data[i] % len(charset.chars)])

    # Fisher-Yates, reusing the same bytes as exchange indices
    for i in range(length - 1, 0, -1):
        j = data[i] % (i + 1)
        chars[i], chars[j] = chars[j], chars[i]

    return "".join(chars)


# Word-based passphrase, optionally capitalised and suffixed with a number
def generate_readable(
    policy: GenerationPolicy,
    word_list: WordList,
    source: RandomSource | None = None,
) -> str:
    source = source or default_source()
    words = []
    for _ in range(policy.word_count):
        word = word_list[source.next_int(len(word_list))]
        if policy.capitalize_words:
            word = word[:1].upper() + word[1:]
        words.append(word)

    sep = policy.joiner()
    result = sep.join(words)
    if policy.append_number:
        number = source.next_int(MAX_APPENDED_NUMBER) + 1
        result += sep + str(number)
    return result


def generate(
    policy: GenerationPolicy,
    word_list: WordList | None = None,
    source: RandomSource | None = None,
) -> GeneratedCredential:
    if policy.mode is Mode.READABLE:
        word_list = word_list or get_word_list(policy.word_list)
        value = generate_readable(policy, word_list, source)
        credential = GeneratedCredential(value, policy, len(word_list))
    else:
        credential = GeneratedCredential(generate_random(policy, source), policy)

    logger.debug(
        "credential_generated",
        mode=policy.mode.value,
        length=len(credential.value),
    )
    return credential


# Independent credentials for export; formatting is up to the caller
def generate_bulk(
    policy: GenerationPolicy,
    count: int,
    word_list: WordList | None = None,
    source: RandomSource | None = None,
) -> List[GeneratedCredential]:
    limit = get_settings().bulk_max
    if not 1 <= count <= limit:
        raise PolicyError(f"count must be between 1 and {limit}")
    if policy.mode is Mode.READABLE and word_list is None:
        word_list = get_word_list(policy.word_list)
    return [generate(policy, word_list, source) for _ in range(count)]

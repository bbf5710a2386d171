"""Tests for entropy bits and crack-time estimates."""

import math

import pytest

from passgen.config import get_settings
from passgen.entropy import entropy_bits, estimate, estimate_credential, format_duration
from passgen.generator import generate
from passgen.policy import GenerationPolicy, Mode
from passgen.wordlists import WORD_LISTS, WordList

from .conftest import ScriptedSource


class TestEntropyBits:
    def test_random_all_classes(self):
        est = estimate(GenerationPolicy(length=16))
        assert est.bits == pytest.approx(16 * math.log2(88))
        assert est.rounded_bits == 103

    def test_random_excludes_similar(self):
        """The effective charset is the filtered union of classes."""
        assert entropy_bits(GenerationPolicy(length=10, exclude_similar=True)) == pytest.approx(10 * math.log2(81))

    def test_random_without_classes_is_zero(self):
        policy = GenerationPolicy(lowercase=False, uppercase=False, digits=False, symbols=False)
        est = estimate(policy)
        assert est.bits == 0
        assert est.online == "0.0s"

    def test_readable_with_extras(self):
        """Capitalisation adds one bit per word and the number adds log2(999)."""
        policy = GenerationPolicy(mode=Mode.READABLE, word_count=4)
        size = len(WORD_LISTS["common"])
        expected = 4 * math.log2(size) + 4 + math.log2(999)
        assert entropy_bits(policy) == pytest.approx(expected)

    def test_readable_plain(self):
        policy = GenerationPolicy(mode=Mode.READABLE, word_count=3, capitalize_words=False, append_number=False)
        assert entropy_bits(policy, word_list_size=1024) == pytest.approx(30.0)

    def test_monotonic_in_length(self):
        bits = [entropy_bits(GenerationPolicy(length=n)) for n in range(4, 129)]
        assert bits == sorted(bits)

    def test_monotonic_in_word_count(self):
        bits = [
            entropy_bits(GenerationPolicy(mode=Mode.READABLE, word_count=n), word_list_size=64)
            for n in range(2, 9)
        ]
        assert bits == sorted(bits)


class TestCrackTime:
    def test_expected_case_rates(self):
        """Half the space is searched on average at the configured rates."""
        policy = GenerationPolicy(length=4, uppercase=False, digits=False, symbols=False)
        est = estimate(policy)
        assert est.online_seconds == pytest.approx(26**4 * 0.5 / 100)
        assert est.offline_seconds == pytest.approx(26**4 * 0.5 / 1e10)
        assert est.online == "38.1m"
        assert est.offline == "0.0s"

    def test_explicit_rates(self):
        policy = GenerationPolicy(length=4, uppercase=False, digits=False, symbols=False)
        est = estimate(policy, online_rate=1.0, offline_rate=2.0)
        assert est.online_seconds == pytest.approx(26**4 * 0.5)
        assert est.offline_seconds == pytest.approx(26**4 * 0.25)

    def test_rates_from_settings(self, monkeypatch):
        monkeypatch.setenv("PASSGEN_ONLINE_RATE", "1000")
        get_settings.cache_clear()
        policy = GenerationPolicy(length=4, uppercase=False, digits=False, symbols=False)
        assert estimate(policy).online_seconds == pytest.approx(26**4 * 0.5 / 1000)

    def test_overflowing_space(self):
        """A guess space beyond float range renders as instant."""
        policy = GenerationPolicy(mode=Mode.READABLE, word_count=8)
        est = estimate(policy, word_list_size=2**200)
        assert math.isinf(est.online_seconds)
        assert est.online == "instant"

    def test_estimate_credential_uses_snapshot(self):
        """Readable credentials carry their word list size for re-estimation."""
        fruit = WordList("fruit", ("apple", "beach", "chair", "dance"))
        policy = GenerationPolicy(mode=Mode.READABLE, word_count=2, capitalize_words=False, append_number=False)
        credential = generate(policy, fruit, ScriptedSource(ints=[0, 1]))
        assert estimate_credential(credential).bits == pytest.approx(4.0)


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "instant"),
            (-5, "instant"),
            (math.inf, "instant"),
            (math.nan, "instant"),
            (0.3, "0.3s"),
            (30, "30.0s"),
            (90, "1.5m"),
            (3600, "1.0h"),
            (2 * 86400, "2.0d"),
            (10 * 365 * 86400, "10.0y"),
        ],
    )
    def test_cascade(self, seconds, expected):
        assert format_duration(seconds) == expected

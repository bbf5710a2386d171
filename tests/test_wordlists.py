"""Tests for word lists."""

import pytest

from passgen import wordlists
from passgen.errors import PolicyError
from passgen.wordlists import WORD_LISTS, WordList, frequency_list, get_word_list


class TestWordList:
    @pytest.mark.parametrize("key", ["common", "animals", "nature"])
    def test_builtin_lists_are_valid(self, key):
        """Built-in lists are lowercase, alphabetic and free of duplicates."""
        word_list = WORD_LISTS[key]
        assert word_list.key == key
        assert len(set(word_list.words)) == len(word_list)
        assert all(w.isalpha() and w.islower() for w in word_list.words)

    def test_duplicates_rejected(self):
        """Duplicates would bias selection, so they are refused."""
        with pytest.raises(ValueError):
            WordList("dupes", ("apple", "beach", "apple"))

    def test_uppercase_rejected(self):
        with pytest.raises(ValueError):
            WordList("shouty", ("Apple",))

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            WordList("empty", ())

    def test_indexing(self):
        word_list = WordList("tiny", ("apple", "beach"))
        assert word_list[1] == "beach"
        assert len(word_list) == 2


class TestGetWordList:
    def test_builtin(self):
        assert get_word_list("animals") is WORD_LISTS["animals"]

    def test_unknown(self):
        with pytest.raises(PolicyError):
            get_word_list("dinosaurs")
        with pytest.raises(PolicyError):
            get_word_list("freq:")

    def test_frequency_list(self, monkeypatch):
        """Frequency lists are transliterated, filtered and de-duplicated."""
        calls = []

        def fake_top_n_list(lang, n):
            calls.append((lang, n))
            return ["the", "café", "cafe", "l'été", "42", "über", "The"]

        monkeypatch.setattr(wordlists, "top_n_list", fake_top_n_list)
        monkeypatch.setattr(wordlists, "_WORDLIST_CACHE", {})

        word_list = get_word_list("freq:xx")
        assert word_list.key == "freq:xx"
        assert word_list.words == ("the", "cafe", "uber")

        # Second lookup is served from the cache
        assert frequency_list("xx") is word_list
        assert calls == [("xx", 5000)]

    def test_frequency_list_without_words(self, monkeypatch):
        monkeypatch.setattr(wordlists, "top_n_list", lambda lang, n: [])
        monkeypatch.setattr(wordlists, "_WORDLIST_CACHE", {})
        with pytest.raises(PolicyError):
            frequency_list("zz")

    def test_unsupported_language(self):
        """A language wordfreq does not know is a policy problem."""
        with pytest.raises(PolicyError):
            get_word_list("freq:zz")

"""Tests for password generation."""

from __future__ import annotations

import string

import pytest

from passforge.config import (
    CONSONANTS,
    FALLBACK_ALPHABET,
    PASSPHRASE_SYMBOLS,
    PASSPHRASE_WORDS,
    VOWELS,
    GenerationConfig,
    Mode,
)
from passforge.generator import generate, generate_many, passphrase_word_count
from passforge.random_source import SecureRandomSource, SequenceRandomSource

AMBIGUOUS = "0O1lI"
NO_CLASSES = dict(
    include_uppercase=False,
    include_lowercase=False,
    include_numbers=False,
    include_special=False,
)


@pytest.fixture
def secure():
    return SecureRandomSource()


class TestStandardMode:
    @pytest.mark.parametrize("length", [1, 2, 8, 16, 64, 128])
    def test_exact_length(self, length, secure):
        assert len(generate(GenerationConfig(length=length), secure)) == length

    def test_default_source_and_config(self):
        assert len(generate()) == 16

    def test_only_enabled_classes(self, secure):
        cfg = GenerationConfig(length=200, include_uppercase=False, include_special=False)
        pw = generate(cfg, secure)
        assert set(pw) <= set(string.ascii_lowercase + string.digits)

    def test_no_classes_falls_back_to_lowercase(self, secure):
        pw = generate(GenerationConfig(length=50, **NO_CLASSES), secure)
        assert len(pw) == 50
        assert set(pw) <= set(string.ascii_lowercase)

    def test_exclude_ambiguous(self, secure):
        cfg = GenerationConfig(length=500, exclude_ambiguous=True)
        pw = generate(cfg, secure)
        assert not any(c in pw for c in AMBIGUOUS)

    def test_deterministic_with_sequence_source(self):
        cfg = GenerationConfig(length=4, **dict(NO_CLASSES, include_lowercase=True))
        assert generate(cfg, SequenceRandomSource([0, 1, 25, 26])) == "abza"


class TestAvoidRepeating:
    def test_repeat_is_redrawn_with_fresh_value(self):
        cfg = GenerationConfig(length=3, mode=Mode.PIN, avoid_repeating=True)
        # First three values fill the positions; the fourth is the redraw.
        assert generate(cfg, SequenceRandomSource([5, 5, 5, 7])) == "575"

    def test_repeats_allowed_when_disabled(self):
        cfg = GenerationConfig(length=4, mode=Mode.PIN)
        assert generate(cfg, SequenceRandomSource([3])) == "3333"

    def test_gives_up_after_attempt_cap(self):
        cfg = GenerationConfig(length=4, mode=Mode.PIN, avoid_repeating=True)
        assert generate(cfg, SequenceRandomSource([3])) == "3333"

    @pytest.mark.parametrize("mode", [Mode.STANDARD, Mode.PIN])
    def test_no_adjacent_duplicates(self, mode, secure):
        cfg = GenerationConfig(length=64, mode=mode, avoid_repeating=True)
        for pw in generate_many(cfg, 50, secure):
            assert all(a != b for a, b in zip(pw, pw[1:]))


class TestPinMode:
    @pytest.mark.parametrize("length", [1, 4, 6, 12])
    def test_digits_only_exact_length(self, length, secure):
        pw = generate(GenerationConfig(length=length, mode=Mode.PIN), secure)
        assert len(pw) == length
        assert pw.isdigit()

    def test_exclude_ambiguous_digits(self, secure):
        cfg = GenerationConfig(length=300, mode=Mode.PIN, exclude_ambiguous=True)
        assert set(generate(cfg, secure)) <= set("23456789")


class TestPronounceableMode:
    def test_alternates_consonants_and_vowels(self, secure):
        cfg = GenerationConfig(length=21, mode=Mode.PRONOUNCEABLE, include_uppercase=False)
        pw = generate(cfg, secure)
        assert len(pw) == 21
        for i, ch in enumerate(pw):
            assert ch in (CONSONANTS if i % 2 == 0 else VOWELS)

    def test_first_letter_uppercased(self):
        cfg = GenerationConfig(length=5, mode=Mode.PRONOUNCEABLE)
        assert generate(cfg, SequenceRandomSource([0])) == "Babab"

    def test_lowercase_without_uppercase_flag(self):
        cfg = GenerationConfig(length=5, mode=Mode.PRONOUNCEABLE, include_uppercase=False)
        assert generate(cfg, SequenceRandomSource([0])) == "babab"

    def test_ignores_repeat_avoidance(self):
        cfg = GenerationConfig(
            length=4, mode=Mode.PRONOUNCEABLE, include_uppercase=False, avoid_repeating=True
        )
        # 'b','a' alternate so no repeats arise; just confirm one draw per position.
        src = SequenceRandomSource([0, 0, 0, 0, 1])
        assert generate(cfg, src) == "baba"
        assert src.next_uniform(1) == [1]


class TestPassphraseMode:
    def test_word_count(self):
        assert passphrase_word_count(0) == 4
        assert passphrase_word_count(20) == 4
        assert passphrase_word_count(29) == 4
        assert passphrase_word_count(30) == 5
        assert passphrase_word_count(60) == 10

    def test_length_20_has_four_words(self, secure):
        cfg = GenerationConfig(length=20, mode=Mode.PASSPHRASE)
        for pw in generate_many(cfg, 20, secure):
            parts = pw.split("-")
            assert len(parts) == 4
            assert parts[0] in PASSPHRASE_WORDS

    def test_long_enough_words_get_no_suffix(self):
        cfg = GenerationConfig(length=20, mode=Mode.PASSPHRASE)
        pw = generate(cfg, SequenceRandomSource([0, 1, 2, 3, 999]))
        assert pw == "apple-banana-cherry-dragon"
        assert len(pw) != cfg.length

    def test_number_suffix_when_short(self):
        cfg = GenerationConfig(length=30, mode=Mode.PASSPHRASE)
        pw = generate(cfg, SequenceRandomSource([0, 0, 0, 0, 0, 1234, 1]))
        # 29 chars of words, 234 brings it to 32 so no symbol follows.
        assert pw == "apple-apple-apple-apple-apple234"

    def test_number_and_symbol_suffix(self):
        cfg = GenerationConfig(length=35, mode=Mode.PASSPHRASE)
        pw = generate(cfg, SequenceRandomSource([0, 0, 0, 0, 0, 1234, 1]))
        assert pw == "apple-apple-apple-apple-apple234@"

    def test_symbol_only(self):
        cfg = GenerationConfig(length=30, mode=Mode.PASSPHRASE, include_numbers=False)
        pw = generate(cfg, SequenceRandomSource([0, 0, 0, 0, 0, 1234]))
        assert pw == "apple-apple-apple-apple-apple" + PASSPHRASE_SYMBOLS[1234 % 8]

    def test_no_suffix_without_flags(self):
        cfg = GenerationConfig(length=200, mode=Mode.PASSPHRASE, **NO_CLASSES)
        pw = generate(cfg, SequenceRandomSource([4]))
        assert pw == "-".join(["eagle"] * 33)


class TestFallback:
    @pytest.mark.parametrize("mode", list(Mode))
    def test_zero_length_never_empty(self, mode, secure):
        pw = generate(GenerationConfig(length=0, mode=mode), secure)
        assert pw

    def test_fallback_uses_alphanumerics(self):
        cfg = GenerationConfig(length=0)
        assert generate(cfg, SequenceRandomSource([61])) == FALLBACK_ALPHABET[61]


class TestGenerateMany:
    def test_count(self, secure):
        assert len(generate_many(GenerationConfig(length=8), 7, secure)) == 7
        assert generate_many(GenerationConfig(), 0, secure) == []

    def test_outputs_differ(self, secure):
        pws = generate_many(GenerationConfig(length=32), 20, secure)
        assert len(set(pws)) == 20

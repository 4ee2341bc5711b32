"""Tests for the random sources."""

from __future__ import annotations

import logging
import random

import pytest

from passforge import random_source
from passforge.random_source import (
    WORD_RANGE,
    FallbackRandomSource,
    SecureRandomSource,
    SequenceRandomSource,
    default_random_source,
    secure_random_available,
)


class TestSecureRandomSource:
    def test_count_and_range(self):
        values = SecureRandomSource().next_uniform(500)
        assert len(values) == 500
        assert all(0 <= v < WORD_RANGE for v in values)

    def test_uses_high_bits(self):
        # 500 draws all below 2**31 has probability 2**-500.
        values = SecureRandomSource().next_uniform(500)
        assert max(values) >= 1 << 31

    def test_non_positive_count_is_empty(self):
        assert SecureRandomSource().next_uniform(0) == []
        assert SecureRandomSource().next_uniform(-3) == []

    def test_is_secure(self):
        assert SecureRandomSource.secure


class TestFallbackRandomSource:
    def test_count_and_range(self):
        values = FallbackRandomSource().next_uniform(200)
        assert len(values) == 200
        assert all(0 <= v < WORD_RANGE for v in values)

    def test_seeded_is_reproducible(self):
        a = FallbackRandomSource(random.Random(7)).next_uniform(10)
        b = FallbackRandomSource(random.Random(7)).next_uniform(10)
        assert a == b

    def test_flagged_insecure(self):
        assert not FallbackRandomSource.secure


class TestSequenceRandomSource:
    def test_cycles(self):
        src = SequenceRandomSource([1, 2, 3])
        assert src.next_uniform(5) == [1, 2, 3, 1, 2]
        assert src.next_uniform(2) == [3, 1]

    def test_values_wrapped_to_32_bits(self):
        assert SequenceRandomSource([WORD_RANGE + 5]).next_uniform(1) == [5]

    def test_empty_sequence_yields_zero(self):
        assert SequenceRandomSource([]).next_uniform(3) == [0, 0, 0]


class TestDefaultRandomSource:
    def test_secure_when_available(self):
        assert secure_random_available()
        assert isinstance(default_random_source(), SecureRandomSource)

    def test_probe_detects_missing_urandom(self, monkeypatch):
        def no_urandom(n):
            raise NotImplementedError

        monkeypatch.setattr(random_source.os, "urandom", no_urandom)
        assert not secure_random_available()

    def test_fallback_is_logged(self, monkeypatch, caplog):
        monkeypatch.setattr(random_source, "secure_random_available", lambda: False)
        with caplog.at_level(logging.WARNING, logger="passforge.random_source"):
            src = default_random_source()
        assert isinstance(src, FallbackRandomSource)
        assert "NOT cryptographically secure" in caplog.text


class TestSecureFlag:
    def test_only_os_source_is_secure(self):
        assert SecureRandomSource().secure
        assert not FallbackRandomSource().secure
        assert not SequenceRandomSource([1]).secure

    def test_subclasses_are_insecure_unless_declared(self):
        class Constant(random_source.RandomSource):
            def next_uniform(self, n):
                return [4] * max(0, n)

        assert Constant().secure is False

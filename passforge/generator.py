"""
High-level password generation for every mode.

generate() never raises for a valid GenerationConfig: degenerate settings
fall back to a usable alphabet instead of failing, so there is always
something to show the user.
"""

from __future__ import annotations

import logging
from typing import List

from .config import (
    CONSONANTS,
    DEFAULT_CONFIG,
    MAX_REPEAT_ATTEMPTS,
    PASSPHRASE_CHARS_PER_WORD,
    PASSPHRASE_MIN_WORDS,
    PASSPHRASE_SEPARATOR,
    PASSPHRASE_SYMBOLS,
    PASSPHRASE_WORDS,
    VOWELS,
    GenerationConfig,
    Mode,
)
from .mapping import FALLBACK_CLASS, CharacterClass, build_character_class, map_values
from .random_source import RandomSource, default_random_source

logger = logging.getLogger(__name__)

_CONSONANT_CLASS = CharacterClass("consonants", CONSONANTS)
_VOWEL_CLASS = CharacterClass("vowels", VOWELS)


def _per_position(
    length: int,
    charset: CharacterClass,
    source: RandomSource,
    avoid_repeating: bool,
) -> str:
    """
    One random word per position, reduced modulo the class size.

    With avoid_repeating, a character equal to its left neighbour is
    redrawn with a fresh word, at most MAX_REPEAT_ATTEMPTS times. After
    that the repeat is kept.
    """
    values = source.next_uniform(length)
    chars: List[str] = []

    for value in values:
        ch = charset.pick(value)
        if avoid_repeating and chars and len(charset) > 1:
            attempts = 1
            while ch == chars[-1] and attempts < MAX_REPEAT_ATTEMPTS:
                ch = charset.pick(source.next_uniform(1)[0])
                attempts += 1
            if ch == chars[-1]:
                logger.debug(
                    "Repeat avoidance exhausted at position %d; keeping %r",
                    len(chars), ch,
                )
        chars.append(ch)

    return "".join(chars)


def _pronounceable(config: GenerationConfig, source: RandomSource) -> str:
    values = source.next_uniform(config.length)
    password = "".join(
        (_CONSONANT_CLASS if i % 2 == 0 else _VOWEL_CLASS).pick(v)
        for i, v in enumerate(values)
    )
    if config.include_uppercase and password:
        password = password[0].upper() + password[1:]
    return password


def passphrase_word_count(length: int) -> int:
    return max(PASSPHRASE_MIN_WORDS, length // PASSPHRASE_CHARS_PER_WORD)


def _passphrase(config: GenerationConfig, source: RandomSource) -> str:
    """
    Words joined by a separator, then an optional number and symbol while
    the result is still shorter than requested. The final length follows
    word boundaries and is not trimmed or padded to config.length.
    """
    word_count = passphrase_word_count(config.length)
    words = [
        PASSPHRASE_WORDS[v % len(PASSPHRASE_WORDS)]
        for v in source.next_uniform(word_count)
    ]
    password = PASSPHRASE_SEPARATOR.join(words)

    if config.include_numbers and len(password) < config.length:
        password += str(source.next_uniform(1)[0] % 1000)
    if config.include_special and len(password) < config.length:
        password += PASSPHRASE_SYMBOLS[source.next_uniform(1)[0] % len(PASSPHRASE_SYMBOLS)]

    return password


def generate(
    config: GenerationConfig | None = None,
    source: RandomSource | None = None,
) -> str:
    """
    Generate one password for ``config`` using ``source``.

    - Standard / Pin: exactly config.length characters.
    - Pronounceable: exactly config.length characters, consonant/vowel.
    - Passphrase: word-boundary length, may differ from config.length.
    """
    cfg = config or DEFAULT_CONFIG
    rng = source or default_random_source()

    if cfg.mode is Mode.PRONOUNCEABLE:
        password = _pronounceable(cfg, rng)
    elif cfg.mode is Mode.PASSPHRASE:
        password = _passphrase(cfg, rng)
    else:
        password = _per_position(
            cfg.length, build_character_class(cfg), rng, cfg.avoid_repeating
        )

    if not password:
        length = max(cfg.length, 1)
        logger.debug("Empty %s result; using alphanumeric fallback", cfg.mode.value)
        password = map_values(rng.next_uniform(length), FALLBACK_CLASS)

    return password


def generate_many(
    config: GenerationConfig | None = None,
    count: int = 1,
    source: RandomSource | None = None,
) -> List[str]:
    """Generate ``count`` independent passwords sharing one source."""
    rng = source or default_random_source()
    return [generate(config, rng) for _ in range(max(0, count))]

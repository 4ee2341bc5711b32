"""
Mapping logic: character classes and turning random words into characters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .config import (
    DIGITS,
    DIGITS_UNAMBIGUOUS,
    FALLBACK_ALPHABET,
    LOWERCASE,
    LOWERCASE_UNAMBIGUOUS,
    SPECIAL,
    UPPERCASE,
    UPPERCASE_UNAMBIGUOUS,
    GenerationConfig,
    Mode,
)


def _dedupe(chars: str) -> str:
    return "".join(dict.fromkeys(chars))


@dataclass(frozen=True)
class CharacterClass:
    """Named, ordered set of characters with no duplicates."""

    name: str
    chars: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "chars", _dedupe(self.chars))

    def __len__(self) -> int:
        return len(self.chars)

    def __contains__(self, ch: object) -> bool:
        return isinstance(ch, str) and len(ch) == 1 and ch in self.chars

    def __bool__(self) -> bool:
        return bool(self.chars)

    def pick(self, value: int) -> str:
        # Modulo bias is below 1e-7 for classes this small; accepted.
        return self.chars[value % len(self.chars)]

    def union(self, other: "CharacterClass", name: str | None = None) -> "CharacterClass":
        return CharacterClass(name or f"{self.name}+{other.name}", self.chars + other.chars)


FALLBACK_CLASS = CharacterClass("alphanumeric", FALLBACK_ALPHABET)


def lowercase_class(exclude_ambiguous: bool = False) -> CharacterClass:
    if exclude_ambiguous:
        return CharacterClass("lowercase-no-ambiguous", LOWERCASE_UNAMBIGUOUS)
    return CharacterClass("lowercase", LOWERCASE)


def uppercase_class(exclude_ambiguous: bool = False) -> CharacterClass:
    if exclude_ambiguous:
        return CharacterClass("uppercase-no-ambiguous", UPPERCASE_UNAMBIGUOUS)
    return CharacterClass("uppercase", UPPERCASE)


def digit_class(exclude_ambiguous: bool = False) -> CharacterClass:
    if exclude_ambiguous:
        return CharacterClass("digits-no-ambiguous", DIGITS_UNAMBIGUOUS)
    return CharacterClass("digits", DIGITS)


def special_class() -> CharacterClass:
    return CharacterClass("special", SPECIAL)


def build_character_class(config: GenerationConfig) -> CharacterClass:
    """
    Character class for the per-position modes (Standard and Pin).

    Standard: union of the enabled classes in lower/upper/digit/special
    order, or plain lowercase when nothing is enabled.
    Pin: digits only.
    Anything that still comes out empty becomes the alphanumeric fallback.
    """
    strict = config.exclude_ambiguous

    if config.mode is Mode.PIN:
        charset = digit_class(strict)
    else:
        parts: List[CharacterClass] = []
        if config.include_lowercase:
            parts.append(lowercase_class(strict))
        if config.include_uppercase:
            parts.append(uppercase_class(strict))
        if config.include_numbers:
            parts.append(digit_class(strict))
        if config.include_special:
            parts.append(special_class())

        if not parts:
            return lowercase_class()

        charset = parts[0]
        for part in parts[1:]:
            charset = charset.union(part)

    return charset if charset else FALLBACK_CLASS


def map_values(values: List[int], charset: CharacterClass) -> str:
    """Map each random word to one character of ``charset``."""
    if not charset:
        charset = FALLBACK_CLASS
    return "".join(charset.pick(v) for v in values)

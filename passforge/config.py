"""
Configuration for the passforge password generator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Mode(str, Enum):
    STANDARD = "standard"
    PRONOUNCEABLE = "pronounceable"
    PIN = "pin"
    PASSPHRASE = "passphrase"


# Character classes. The unambiguous variants drop 0 O l 1 I.
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
LOWERCASE_UNAMBIGUOUS = "abcdefghijkmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
UPPERCASE_UNAMBIGUOUS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
DIGITS = "0123456789"
DIGITS_UNAMBIGUOUS = "23456789"
SPECIAL = "!@#$%^&*()_+-=[]{}|;:,.<>?"

CONSONANTS = "bcdfghjklmnpqrstvwxyz"
VOWELS = "aeiou"

# Used whenever a mode ends up with nothing to draw from.
FALLBACK_ALPHABET = LOWERCASE + UPPERCASE + DIGITS

PASSPHRASE_WORDS = (
    "apple", "banana", "cherry", "dragon", "eagle", "forest", "galaxy", "harbor",
    "island", "jaguar", "knight", "lighthouse", "mountain", "nebula", "ocean", "phoenix",
    "quantum", "rainbow", "sunset", "thunder", "universe", "volcano", "whisper", "zenith",
    "adventure", "brilliant", "champion", "discover", "elephant", "fantasy", "grateful", "harmony",
)
PASSPHRASE_SEPARATOR = "-"
PASSPHRASE_SYMBOLS = "!@#$%^&*"
PASSPHRASE_MIN_WORDS = 4
# One word per this many requested characters.
PASSPHRASE_CHARS_PER_WORD = 6

# Redraw budget per position when avoiding repeated neighbours.
MAX_REPEAT_ATTEMPTS = 100

HISTORY_LIMIT = 5
FAVORITES_LIMIT = 10


@dataclass(frozen=True)
class GenerationConfig:
    # Requested password length in characters.
    # Passphrase mode treats it as a target, not an exact size.
    length: int = 16

    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_special: bool = True

    # Swap in the unambiguous variants of each class.
    exclude_ambiguous: bool = False

    # Best effort: never two equal neighbours unless the redraw budget runs out.
    avoid_repeating: bool = False

    mode: Mode = Mode.STANDARD

    def __post_init__(self) -> None:
        if not isinstance(self.mode, Mode):
            # Raises ValueError for unknown names.
            object.__setattr__(self, "mode", Mode(str(self.mode).lower()))

    def with_options(self, **changes) -> "GenerationConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = GenerationConfig()

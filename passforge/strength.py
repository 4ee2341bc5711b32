"""
Strength estimation: charset size, entropy, a 0-10 score and crack times.

Everything here is a pure function of the password text. The generator's
configuration is deliberately not an input, so a typed-in password scores
the same way as a generated one.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

# Attacker guess rates, guesses per second.
ONLINE_GUESSES_PER_SECOND = 1e10
OFFLINE_GUESSES_PER_SECOND = 1e14

LOWERCASE_POOL = 26
UPPERCASE_POOL = 26
DIGIT_POOL = 10
# Flat estimate for "anything else", not a count of the symbols used.
OTHER_POOL = 32

LENGTH_THRESHOLDS = (8, 12, 16, 20, 24)

# (minimum entropy bits, bonus); first match wins.
ENTROPY_BONUSES = (
    (128, 2.0),
    (100, 1.5),
    (80, 1.0),
    (60, 0.5),
)

MAX_SCORE = 10

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR
DAYS_PER_YEAR = 365
CENTURIES_AFTER_YEARS = 1_000_000


class StrengthLevel(NamedTuple):
    label: str
    color: str
    text_color: str


STRENGTH_LEVELS = (
    StrengthLevel("Very Weak", "bg-red-500", "text-red-500"),
    StrengthLevel("Weak", "bg-orange-500", "text-orange-500"),
    StrengthLevel("Fair", "bg-amber-400", "text-amber-400"),
    StrengthLevel("Good", "bg-yellow-400", "text-yellow-400"),
    StrengthLevel("Strong", "bg-emerald-500", "text-emerald-500"),
    StrengthLevel("Very Strong", "bg-teal-500", "text-teal-500"),
    StrengthLevel("Excellent", "bg-cyan-500", "text-cyan-500"),
    StrengthLevel("Outstanding", "bg-blue-500", "text-blue-500"),
    StrengthLevel("Exceptional", "bg-indigo-500", "text-indigo-500"),
    StrengthLevel("Perfect", "bg-purple-500", "text-purple-500"),
)


@dataclass(frozen=True)
class CrackTime:
    online: str
    offline: str


@dataclass(frozen=True)
class StrengthResult:
    """
    Full strength report for one password.

    score is rounded to one decimal; label and colors come from the
    unrounded score.
    """

    score: float
    label: str
    color: str
    text_color: str
    entropy_bits: float
    charset_size: int
    crack_time: CrackTime

    @property
    def entropy(self) -> str:
        """Entropy in bits as a two-decimal string, e.g. ``"37.60"``."""
        return f"{self.entropy_bits:.2f}"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["entropy"] = self.entropy
        return data


# ---------- character classes ----------

def _has_lower(password: str) -> bool:
    return any("a" <= c <= "z" for c in password)


def _has_upper(password: str) -> bool:
    return any("A" <= c <= "Z" for c in password)


def _has_digit(password: str) -> bool:
    return any("0" <= c <= "9" for c in password)


def _has_other(password: str) -> bool:
    # ASCII-only classes: accented letters and non-ASCII digits count as "other".
    return any(not (c.isascii() and c.isalnum()) for c in password)


def charset_size(password: str) -> int:
    """
    Estimated alphabet size from the classes present in ``password``.
    Falls back to 26 when nothing matched (the empty password).
    """
    size = 0
    if _has_lower(password):
        size += LOWERCASE_POOL
    if _has_upper(password):
        size += UPPERCASE_POOL
    if _has_digit(password):
        size += DIGIT_POOL
    if _has_other(password):
        size += OTHER_POOL
    return size or LOWERCASE_POOL


def entropy_bits(password: str, size: int | None = None) -> float:
    """len(password) * log2(charset size); 0.0 for an empty password."""
    if size is None:
        size = charset_size(password)
    if not password or size <= 0:
        return 0.0
    return len(password) * math.log2(size)


# ---------- crack time ----------

def _plural(value: float, unit: str) -> str:
    return unit if value == 1 else unit + "s"


def _fixed(value: float, places: int) -> str:
    """Fixed-point text, exact halves rounded up (1.25 -> "1.3")."""
    step = Decimal(1).scaleb(-places)
    return str(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def format_duration(seconds: float) -> str:
    """
    Human readable duration with fixed breakpoints:
    Instant, seconds, minutes, hours, days, years, Centuries.
    """
    if seconds < 1:
        return "Instant"
    if seconds < SECONDS_PER_MINUTE:
        return f"{_fixed(seconds, 0)} {_plural(seconds, 'second')}"

    minutes = seconds / SECONDS_PER_MINUTE
    if minutes < 60:
        return f"{_fixed(minutes, 1)} {_plural(minutes, 'minute')}"

    hours = minutes / 60
    if hours < 24:
        return f"{_fixed(hours, 1)} {_plural(hours, 'hour')}"

    days = hours / 24
    if days < DAYS_PER_YEAR:
        return f"{_fixed(days, 1)} {_plural(days, 'day')}"

    years = days / DAYS_PER_YEAR
    if years < CENTURIES_AFTER_YEARS:
        return f"{_fixed(years, 1)} {_plural(years, 'year')}"

    return "Centuries"


def search_space(entropy: float) -> float:
    """2 ** entropy, saturating to infinity instead of overflowing."""
    try:
        return 2.0 ** entropy
    except OverflowError:
        return math.inf


def estimate_crack_time(entropy: float) -> CrackTime:
    combinations = search_space(entropy)
    return CrackTime(
        online=format_duration(combinations / ONLINE_GUESSES_PER_SECOND),
        offline=format_duration(combinations / OFFLINE_GUESSES_PER_SECOND),
    )


# ---------- score ----------

def _raw_score(password: str, entropy: float) -> float:
    length = len(password)
    total = float(sum(1 for threshold in LENGTH_THRESHOLDS if length >= threshold))

    for present in (
        _has_lower(password),
        _has_upper(password),
        _has_digit(password),
        _has_other(password),
    ):
        if present:
            total += 1

    for minimum, bonus in ENTROPY_BONUSES:
        if entropy >= minimum:
            total += bonus
            break

    return min(total, MAX_SCORE)


def strength_level(raw: float) -> StrengthLevel:
    index = min(int(math.floor(max(raw, 0))), len(STRENGTH_LEVELS) - 1)
    return STRENGTH_LEVELS[index]


def score(password: str) -> StrengthResult:
    """
    Score ``password``. Never raises; the empty string scores 0, "Very Weak".
    """
    password = password or ""
    size = charset_size(password)
    entropy = entropy_bits(password, size)
    raw = _raw_score(password, entropy) if password else 0.0
    level = strength_level(raw)

    return StrengthResult(
        score=round(raw, 1),
        label=level.label,
        color=level.color,
        text_color=level.text_color,
        entropy_bits=entropy,
        charset_size=size,
        crack_time=estimate_crack_time(entropy),
    )

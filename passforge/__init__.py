"""
passforge: password generator and strength estimator.
"""

from .config import GenerationConfig, Mode, DEFAULT_CONFIG
from .generator import generate, generate_many
from .errors import PassforgeError, StoreError
from .history import PasswordStore
from .random_source import (
    RandomSource,
    SecureRandomSource,
    FallbackRandomSource,
    SequenceRandomSource,
    default_random_source,
)
from .strength import CrackTime, StrengthResult, score

__all__ = [
    "GenerationConfig",
    "Mode",
    "DEFAULT_CONFIG",
    "generate",
    "generate_many",
    "score",
    "StrengthResult",
    "CrackTime",
    "RandomSource",
    "SecureRandomSource",
    "FallbackRandomSource",
    "SequenceRandomSource",
    "default_random_source",
    "PasswordStore",
    "PassforgeError",
    "StoreError",
]

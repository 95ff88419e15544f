"""Deterministic sprint name generation and seed helpers."""

from .generator import NAME_PREFIX, GeneratedName, NameGenerator
from .seeds import SEED_PATTERN, is_strict_seed, iso_week_seed, seed_from_timestamp
from .wordlists import ADJECTIVES, NOUNS

__all__ = [
    "ADJECTIVES",
    "NAME_PREFIX",
    "NOUNS",
    "SEED_PATTERN",
    "GeneratedName",
    "NameGenerator",
    "is_strict_seed",
    "iso_week_seed",
    "seed_from_timestamp",
]

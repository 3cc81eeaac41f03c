"""Random sources for tile spawning.

A session either draws from an unseeded ``random.Random`` or, when a seed
token is supplied, from :class:`LcgRandom`, a 32-bit linear congruential
generator whose draw sequence is identical on every platform.
"""
from __future__ import annotations

import math
import random

from linefix.constants import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
    LCG_ZERO_SEED_FALLBACK,
)

SeedToken = int | float | str


def hash_seed_token(text: str) -> int:
    """FNV-1a style fold of ``text`` into an unsigned 32-bit value."""

    value = FNV_OFFSET_BASIS
    for char in text:
        value ^= ord(char)
        value = (value * FNV_PRIME) % LCG_MODULUS
    return value


def _to_uint32(number: float) -> int:
    if not math.isfinite(number):
        return 0
    return int(number) % LCG_MODULUS


def parse_seed(token: SeedToken | None) -> int | None:
    """Derive an unsigned 32-bit seed from a numeric or string token.

    Numeric tokens (including numeric strings) are used directly; anything
    else, and numeric tokens equal to zero, is hashed.
    """

    if token is None:
        return None
    if isinstance(token, bool):
        token = int(token)
    if isinstance(token, (int, float)):
        if token and not math.isnan(token):
            return _to_uint32(token)
        return hash_seed_token(str(token))
    text = str(token)
    stripped = text.strip()
    try:
        number = float(stripped) if stripped else 0.0
    except ValueError:
        return hash_seed_token(text)
    if number and not math.isnan(number):
        return _to_uint32(number)
    return hash_seed_token(text)


class LcgRandom(random.Random):
    """``random.Random`` driven by state = state * 1664525 + 1013904223 (mod 2**32)."""

    def __init__(self, seed: int = LCG_ZERO_SEED_FALLBACK) -> None:
        self._state = LCG_ZERO_SEED_FALLBACK
        super().__init__(seed)

    def seed(self, a=None, version: int = 2) -> None:  # type: ignore[override]
        if a is None:
            a = LCG_ZERO_SEED_FALLBACK
        self._state = (int(a) % LCG_MODULUS) or LCG_ZERO_SEED_FALLBACK

    def random(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def getstate(self):  # type: ignore[override]
        return self._state

    def setstate(self, state) -> None:  # type: ignore[override]
        self._state = int(state)


def make_rng(seed: SeedToken | None = None) -> random.Random:
    """Return a reproducible generator for ``seed`` or an unseeded one when absent."""

    derived = parse_seed(seed)
    if derived is None:
        return random.Random()
    return LcgRandom(derived)

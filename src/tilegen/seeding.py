"""Seed parsing and the per-call random context."""

import hashlib
import logging
import re
from dataclasses import dataclass

import numpy as np

from .terrain.noise import SimplexNoise

logger = logging.getLogger(__name__)

MASK_32 = 0xFFFFFFFF
MASK_64 = 0xFFFFFFFFFFFFFFFF

# Optional whitespace, sign and ASCII digits; anything after the digits is ignored
NUMERIC_SEED = re.compile(r"\s*([+-]?)([0-9]+)")


def parse_seed(seed: str) -> int:
    """Convert a seed string into a 64-bit integer.

    A leading base-10 integer is used directly, negative values wrapping
    into 64 bits. Text without one, or whose number needs more than 64 bits,
    falls back to a stable hash of the whole string, so "forest" seeds the
    same way in every process.

    Args:
        seed: User-supplied seed text.

    Returns:
        Unsigned 64-bit seed value.
    """
    match = NUMERIC_SEED.match(seed)
    if match:
        sign, digits = match.groups()
        digits = digits.lstrip("0") or "0"
        # 2**64 - 1 has 20 digits
        if len(digits) <= 20 and int(digits) <= MASK_64:
            value = -int(digits) if sign == "-" else int(digits)
            return value & MASK_64
        logger.debug(f"Seed {seed!r} does not fit in 64 bits")

    digest = hashlib.blake2b(seed.encode("utf-8"), digest_size=8).digest()
    value = int.from_bytes(digest, "little")
    logger.debug(f"Seed {seed!r} hashed to {value}")
    return value


def noise_seed(value: int) -> int:
    """Low 32 bits: seeds the noise permutation."""
    return value & MASK_32


def rng_seed(value: int) -> int:
    """High and low halves mixed: seeds the general-purpose RNG."""
    return ((value >> 32) ^ value) & MASK_32


@dataclass(frozen=True)
class GenerationContext:
    """Noise and RNG owned by exactly one generation call.

    Built fresh from the seed for every call and passed explicitly to each
    step; nothing is shared between calls.
    """

    seed: str
    seed_value: int
    noise: SimplexNoise
    rng: np.random.Generator

    @classmethod
    def from_seed(cls, seed: str) -> "GenerationContext":
        value = parse_seed(seed)
        return cls(
            seed=seed,
            seed_value=value,
            noise=SimplexNoise(noise_seed(value)),
            rng=np.random.default_rng(rng_seed(value)),
        )

"""
Random number generation utilities.

Generators that accept an optional ``prng`` argument fall back to the
module-level Alea PRNG below. Python's ``random`` module and NumPy's
global random state are never used, so a seed fully determines output.
"""

from typing import Optional

from ..config import settings
from ..core.alea_prng import AleaPRNG, Seed

# Global PRNG instance
_prng = None


def set_random_seed(seed: Seed) -> None:
    """
    Reseed the module-level Alea PRNG.

    Args:
        seed: Seed string or number
    """
    global _prng
    _prng = AleaPRNG(seed)


def get_prng() -> AleaPRNG:
    """
    Get the module-level Alea PRNG instance, creating it on first use.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG(settings.default_seed)
    return _prng


def resolve_prng(prng: Optional[AleaPRNG]) -> AleaPRNG:
    """Return ``prng`` or the module-level generator when it is None."""
    return prng if prng is not None else get_prng()

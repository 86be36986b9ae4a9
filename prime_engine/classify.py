"""
Cheap primality classification against the cache.

Responsibility: resolve a query without Miller-Rabin or sieving when possible.
Read-only: never mutates the cache.
"""

from math import isqrt
from typing import Optional

from .cache import PrimeCache
from .seed import SEED_CEILING, SEED_SET


def is_perfect_square(n: int) -> bool:
    """Exact perfect-square test using the integer square root."""
    r = isqrt(n)
    return r * r == n


def classify(n: int, cache: PrimeCache) -> Optional[bool]:
    """
    Classify n as prime, composite, or unknown.

    Checks run cheapest first; the high-water mark makes absence from the
    cache conclusive for every n it covers.

    Parameters
    ----------
    n : int
        Value in [0, 2**64 - 1].
    cache : PrimeCache
        Cache consulted read-only.

    Returns
    -------
    bool or None
        True (prime), False (composite or < 2), None (escalate).
    """
    if n <= 1:
        return False
    if n <= SEED_CEILING:
        return n in SEED_SET
    known = cache.lookup(n)
    if known is not None:
        return known
    if n % 2 == 0 or n % 3 == 0 or n % 5 == 0 or n % 7 == 0:
        return False
    if is_perfect_square(n):
        return False
    return None

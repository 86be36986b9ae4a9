"""
Batched Sieve of Eratosthenes over odd values.

Responsibility: extend a PrimeCache to an arbitrary bound in fixed-size
batches. One boolean per odd value, so a batch of `size` slots spans
2 * size integers.

Index mapping inside a batch whose first odd value is `first`:
- Index i     -> first + 2i
- Value n     -> (n - first) // 2
Odd multiples of an odd prime p are 2p apart, i.e. p slots apart.
"""

import logging
from math import isqrt
from typing import Iterable, List, Tuple

import numpy as np

from .cache import PrimeCache
from .errors import SieveAllocationError

logger = logging.getLogger(__name__)

# Default number of odd slots per batch (16 MB of flags).
DEFAULT_BATCH_SIZE = 1 << 24


def odd_bounds(lo: int, hi: int) -> Tuple[int, int]:
    """
    Return the first and last odd values >= 3 inside [lo, hi].

    The result has first > last when the range holds no such value.
    """
    first = max(lo, 3)
    if first % 2 == 0:
        first += 1
    last = hi if hi % 2 == 1 else hi - 1
    return first, last


def first_odd_multiple(p: int, first: int) -> int:
    """
    Smallest odd multiple of odd p that is >= first and >= p*p.

    Multiples below p*p were already struck by smaller primes.
    """
    m = -(-first // p) * p
    if m % 2 == 0:
        m += p
    return max(m, p * p)


def allocate_flags(size: int) -> np.ndarray:
    """Allocate a batch of `size` slots, all marked prime."""
    try:
        return np.ones(size, dtype=bool)
    except MemoryError as exc:
        logger.error("Could not allocate sieve batch of %d slots", size)
        raise SieveAllocationError(f"could not allocate sieve batch of {size} slots") from exc


def sieve_segment(lo: int, hi: int, base_primes: Iterable[int]) -> List[int]:
    """
    Return every prime in [lo, hi], ascending.

    Parameters
    ----------
    lo, hi : int
        Inclusive bounds, 0 <= lo, hi <= 2**64 - 1.
    base_primes : iterable of int
        Ascending primes containing every prime p < lo with p*p <= hi.
        Primes >= lo are found from the segment itself. Extra entries are
        ignored.

    Returns
    -------
    list of int
        Primes in [lo, hi].
    """
    result = [2] if lo <= 2 <= hi else []
    first, last = odd_bounds(lo, hi)
    if first > last:
        return result

    size = (last - first) // 2 + 1
    flags = allocate_flags(size)

    # Strike with primes below the segment
    for p in base_primes:
        if p < 3:
            continue
        if p >= first or p * p > last:
            break
        start = first_odd_multiple(p, first)
        flags[(start - first) // 2::p] = False

    # Primes inside the segment that still need to strike their multiples
    i = 0
    limit = isqrt(last)
    while first + 2 * i <= limit:
        if flags[i]:
            p = first + 2 * i
            flags[(p * p - first) // 2::p] = False
        i += 1

    offsets = np.flatnonzero(flags).astype(np.uint64)
    values = np.uint64(first) + np.uint64(2) * offsets
    result.extend(values.tolist())
    return result


def next_batch(mark: int, target: int, batch_size: int) -> Tuple[int, int]:
    """
    Bounds of the batch that follows high-water mark `mark`.

    Returns
    -------
    tuple
        (lo, hi) with lo = mark + 1 and hi <= target, covering at most
        batch_size odd values.
    """
    lo = mark + 1
    hi = min(lo + 2 * batch_size - 1, target)
    return lo, hi


def sieve_up_to(cache: PrimeCache, limit: int, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
    """
    Extend cache until max_checked >= limit.

    Each batch runs under the cache's writer lock and is published whole, so
    the cache invariant holds between batches. Other writers may run between
    batches.

    Parameters
    ----------
    cache : PrimeCache
        Cache to extend.
    limit : int
        Target high-water mark.
    batch_size : int
        Odd slots per batch.

    Returns
    -------
    int
        Number of batches sieved (0 when the cache already covered limit).
    """
    if limit <= cache.max_checked:
        return 0

    cache.bootstrap()

    batches = 0
    while True:
        with cache.lock:
            mark = cache.max_checked
            if mark >= limit:
                break
            lo, hi = next_batch(mark, limit, batch_size)
            base = cache.primes_up_to(isqrt(hi))
            primes = sieve_segment(lo, hi, base)
            cache.publish(primes, lo, hi)
        batches += 1
        logger.debug("Sieved batch %d: [%d, %d], %d primes", batches, lo, hi, len(primes))

    if batches:
        logger.debug("Cache now checked up to %d (%d primes)", cache.max_checked, len(cache))
    return batches

"""
Prime cache with a high-water mark.

Responsibility: storage of discovered primes. No sieving, no primality logic.

Invariant: for every v <= max_checked, v is prime iff v is listed.
Primes above max_checked may be known individually (extras); their absence
proves nothing.

Writers serialize on one re-entrant lock. Readers take no lock: a batch is
published by extending the list first and raising max_checked afterwards,
so any max_checked a reader observes is already backed by the list.
"""

import logging
import threading
from bisect import bisect_right
from typing import Iterable, List, Optional, Set

from .seed import SEED_CEILING, SEED_PRIMES

logger = logging.getLogger(__name__)


class PrimeCache:
    """
    Ordered primes plus the largest value whose primality is fully resolved.

    Parameters
    ----------
    seeded : bool
        Start from the seed table (max_checked = SEED_CEILING). When False the
        cache starts empty with max_checked = 1 and the first sieve call
        bootstraps it.
    """

    def __init__(self, seeded: bool = True):
        self.lock = threading.RLock()
        self._primes: List[int] = []
        self._extras: Set[int] = set()
        self._max_checked = 1
        self.reset(seeded)

    @property
    def max_checked(self) -> int:
        return self._max_checked

    def __len__(self) -> int:
        return len(self._primes) + len(self._extras)

    def lookup(self, n: int) -> Optional[bool]:
        """
        Verdict for n from a single read of the mark.

        Returns
        -------
        bool or None
            True if n is a known prime, False if n <= max_checked and unlisted,
            None if n lies above the mark and is not a known extra.
        """
        mark = self._max_checked
        if n <= mark:
            primes = self._primes
            i = bisect_right(primes, n)
            return i > 0 and primes[i - 1] == n
        if n in self._extras:
            return True
        return None

    def contains(self, n: int) -> bool:
        """True iff n is a known prime (listed, or an extra above the mark)."""
        return self.lookup(n) is True

    def primes_up_to(self, limit: int) -> List[int]:
        """
        Return listed primes <= limit, ascending.

        Only complete when limit <= max_checked; callers sieve first.
        """
        mark = self._max_checked
        primes = self._primes
        return primes[:bisect_right(primes, min(limit, mark))]

    def extras(self) -> List[int]:
        """Primes above max_checked found by individual tests, ascending."""
        with self.lock:
            return sorted(self._extras)

    def add(self, p: int) -> None:
        """Record a single prime proven outside the sieve."""
        if p <= self._max_checked:
            return
        with self.lock:
            if p > self._max_checked:
                self._extras.add(p)

    def bootstrap(self) -> bool:
        """
        Union in the seed table if the mark is still below its ceiling.

        Returns
        -------
        bool
            True if the seed table was merged.
        """
        with self.lock:
            if self._max_checked >= SEED_CEILING:
                return False
            merged = sorted(set(self._primes) | set(SEED_PRIMES))
            self._primes = merged
            self._max_checked = SEED_CEILING
            self._extras = {p for p in self._extras if p > SEED_CEILING}
            logger.debug("Bootstrapped cache with %d seed primes", len(SEED_PRIMES))
            return True

    def publish(self, batch_primes: Iterable[int], batch_min: int, batch_max: int) -> None:
        """
        Merge one fully sieved batch.

        Parameters
        ----------
        batch_primes : iterable of int
            Every prime in [batch_min, batch_max], ascending.
        batch_min : int
            Lower bound of the batch; must be max_checked + 1.
        batch_max : int
            Upper bound (inclusive) of the batch.

        Raises
        ------
        ValueError
            If the batch does not start right after max_checked.
        """
        with self.lock:
            if batch_min != self._max_checked + 1:
                raise ValueError(
                    f"batch starts at {batch_min}, expected {self._max_checked + 1}")
            self._primes.extend(batch_primes)
            self._max_checked = batch_max
            if self._extras:
                self._extras = {p for p in self._extras if p > batch_max}

    def reset(self, seeded: bool = True) -> None:
        """
        Return to the seeded state (or the empty state).

        Not meant to run while other threads are reading.
        """
        with self.lock:
            self._max_checked = 1
            self._extras = set()
            self._primes = []
            if seeded:
                self._primes = list(SEED_PRIMES)
                self._max_checked = SEED_CEILING
            logger.debug("Cache reset (seeded=%s)", seeded)

"""
Prime engine: the public surface.

Responsibility: route queries through the classifier, Miller-Rabin and the
batched sieve, and own the cache and memo tables. Every argument is checked
to lie in [0, 2**64 - 1].
"""

import logging
from typing import List, Optional

from . import divisors as _divisors
from . import factorization
from .batch_sieve import DEFAULT_BATCH_SIZE, sieve_up_to
from .cache import PrimeCache
from .classify import classify
from .config import EngineConfig
from .errors import InvalidInput, RangeExhausted, check_u64
from .memo import Memo
from .miller_rabin import miller_rabin
from .seed import U64_MAX

logger = logging.getLogger(__name__)


class PrimeEngine:
    """
    Exact primality, enumeration and factorization for unsigned 64-bit values.

    Parameters
    ----------
    max_batch_size : int
        Odd slots per sieve batch.
    cache : PrimeCache, optional
        Cache to use. A fresh seeded cache by default.

    Examples
    --------
    >>> engine = PrimeEngine()
    >>> engine.get_primes_up_to(30)
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> engine.prime_factors(360)
    [2, 2, 2, 3, 3, 5]
    """

    def __init__(self, max_batch_size: int = DEFAULT_BATCH_SIZE,
                 cache: Optional[PrimeCache] = None):
        if max_batch_size <= 0:
            raise InvalidInput(f"max_batch_size must be positive, got {max_batch_size}")
        self.max_batch_size = max_batch_size
        self._cache = cache if cache is not None else PrimeCache()
        self._factors = Memo(self._compute_prime_factors)
        self._distinct = Memo(self._compute_distinct_prime_factors)
        self._count_distinct = Memo(self._compute_count_distinct)
        self._totient = Memo(self._compute_totient)
        self._proper_divisors = Memo(self._compute_proper_divisors)

    @classmethod
    def from_config(cls, config: EngineConfig) -> 'PrimeEngine':
        return cls(max_batch_size=config.max_batch_size)

    @property
    def cache(self) -> PrimeCache:
        return self._cache

    @property
    def max_checked(self) -> int:
        return self._cache.max_checked

    # ========== Primality ==========

    def is_prime(self, n: int) -> bool:
        """Exact primality of n. Primes found by Miller-Rabin are cached."""
        n = check_u64(n)
        verdict = classify(n, self._cache)
        if verdict is not None:
            return verdict
        if miller_rabin(n):
            self._cache.add(n)
            return True
        return False

    def is_composite(self, n: int) -> bool:
        n = check_u64(n)
        return n > 1 and not self.is_prime(n)

    def is_prime_by_trial_division(self, n: int) -> bool:
        """
        Slow reference test: sieve up to isqrt(n) and divide by cached primes.

        Gives the same answers as is_prime(); kept as an independent check of
        the Miller-Rabin path.
        """
        n = check_u64(n)
        verdict = classify(n, self._cache)
        if verdict is not None:
            return verdict
        root = _divisors.integer_sqrt(n)
        self.sieve_up_to(root)
        for p in self._cache.primes_up_to(root):
            if n % p == 0:
                return False
        self._cache.add(n)
        return True

    # ========== Sieve ==========

    def sieve_up_to(self, limit: int) -> int:
        """
        Ensure every prime <= limit is cached and max_checked >= limit.

        Returns
        -------
        int
            Number of sieve batches run (0 if nothing was needed).
        """
        limit = check_u64(limit, 'limit')
        return sieve_up_to(self._cache, limit, self.max_batch_size)

    def get_primes_up_to(self, limit: int) -> List[int]:
        """All primes <= limit, ascending."""
        limit = check_u64(limit, 'limit')
        if limit < 2:
            return []
        self.sieve_up_to(limit)
        return self._cache.primes_up_to(limit)

    # ========== Navigation ==========

    def next_prime(self, n: int) -> int:
        """
        Smallest prime > n.

        Raises
        ------
        RangeExhausted
            If no prime > n is <= 2**64 - 1.
        """
        n = check_u64(n)
        if n < 2:
            return 2
        p = n if n % 2 == 1 else n - 1
        while True:
            if p == U64_MAX:
                raise RangeExhausted(
                    f"There are no prime numbers > {n} but <= {U64_MAX}")
            p += 2
            if self.is_prime(p):
                return p

    def previous_prime(self, n: int) -> int:
        """
        Largest prime < n.

        Raises
        ------
        InvalidInput
            If n <= 2.
        """
        n = check_u64(n)
        if n <= 2:
            raise InvalidInput(f"There are no prime numbers < {n}")
        if n == 3:
            return 2
        p = n if n % 2 == 1 else n + 1
        while True:
            p -= 2
            if self.is_prime(p):
                return p

    # ========== Factorization ==========

    def _compute_prime_factors(self, n: int) -> tuple:
        return tuple(factorization.prime_factors(n, self.is_prime, self._factors))

    def _compute_distinct_prime_factors(self, n: int) -> tuple:
        return tuple(factorization.distinct(self._factors(n)))

    def _compute_count_distinct(self, n: int) -> int:
        return len(self._distinct(n))

    def _compute_totient(self, n: int) -> int:
        return factorization.totient(n, self._distinct(n))

    def prime_factors(self, n: int) -> List[int]:
        """Prime factors of n, ascending, with repetition. [] for n <= 1."""
        return list(self._factors(check_u64(n)))

    def distinct_prime_factors(self, n: int) -> List[int]:
        """Distinct prime factors of n, ascending."""
        return list(self._distinct(check_u64(n)))

    def count_distinct_prime_factors(self, n: int) -> int:
        return self._count_distinct(check_u64(n))

    def totient(self, n: int) -> int:
        """Euler's phi of n."""
        return self._totient(check_u64(n))

    # ========== Divisors ==========

    def _compute_proper_divisors(self, n: int) -> tuple:
        return tuple(_divisors.proper_divisors(n))

    def gcd(self, a: int, b: int) -> int:
        return _divisors.gcd(check_u64(a, 'a'), check_u64(b, 'b'))

    def lcm(self, a: int, b: int) -> int:
        """Least common multiple; may exceed 2**64 - 1."""
        return _divisors.lcm(check_u64(a, 'a'), check_u64(b, 'b'))

    def are_coprime(self, a: int, b: int) -> bool:
        return _divisors.are_coprime(check_u64(a, 'a'), check_u64(b, 'b'))

    def proper_divisors(self, n: int) -> List[int]:
        return list(self._proper_divisors(check_u64(n)))

    def divisors(self, n: int) -> List[int]:
        n = check_u64(n)
        return _divisors.divisors(n, list(self._proper_divisors(n)))

    def sum_divisors(self, n: int) -> int:
        n = check_u64(n)
        return _divisors.sum_divisors(n, list(self._proper_divisors(n)))

    def perfect_number(self, n: int) -> int:
        """0 if n is perfect, -1 if deficient, 1 if abundant."""
        n = check_u64(n)
        return _divisors.perfect_number(n, list(self._proper_divisors(n)))

    # ========== Cache ==========

    def clear_cache(self) -> None:
        """Reset the prime cache to the seed table and empty every memo table."""
        self._cache.reset()
        for memo in (self._factors, self._distinct, self._count_distinct,
                     self._totient, self._proper_divisors):
            memo.clear()
        logger.debug("Engine caches cleared")

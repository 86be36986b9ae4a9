"""
Tests for the deterministic Miller-Rabin test.

Strong pseudoprimes to leading subsets of the witness set must still be
reported composite; the full witness set is exact over u64.
"""

import numpy as np
import pytest
from math import isqrt

from prime_engine.batch_sieve import sieve_segment
from prime_engine.engine import PrimeEngine
from prime_engine.miller_rabin import WITNESSES, decompose, miller_rabin, passes_witness


def trial_division(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True


KNOWN_PRIMES = [
    2, 3, 37, 41, 65521, 2147483647, 4294967291,
    2**61 - 1,
    999999999999999989,
    2**64 - 59,
]

CARMICHAEL = [561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265]

STRONG_PSEUDOPRIMES = [
    # (n, number of leading witnesses it fools)
    (2047, 1),
    (1373653, 2),
    (25326001, 3),
    (3215031751, 4),
    (2152302898747, 5),
    (3474749660383, 6),
    (341550071728321, 8),
    (3825123056546413051, 9),
]


class TestDecompose:
    """n - 1 = 2^s * d with d odd."""

    def test_decompose_values(self):
        for n in [3, 5, 9, 17, 97, 2**61 - 1, 2**64 - 59]:
            s, d = decompose(n)
            assert d % 2 == 1, f"d={d} should be odd for n={n}"
            assert (2**s) * d == n - 1

    def test_decompose_power_of_two_plus_one(self):
        assert decompose(17) == (4, 1)
        assert decompose(65537) == (16, 1)


class TestMillerRabin:
    """Exact primality over u64."""

    def test_agrees_with_trial_division_below_20000(self):
        for n in range(20000):
            assert miller_rabin(n) == trial_division(n), f"miller_rabin({n}) disagrees"

    def test_known_primes(self):
        for p in KNOWN_PRIMES:
            assert miller_rabin(p), f"{p} should be prime"

    def test_witnesses_are_prime(self):
        for a in WITNESSES:
            assert miller_rabin(a)

    def test_carmichael_numbers_composite(self):
        for n in CARMICHAEL:
            assert not miller_rabin(n), f"Carmichael number {n} should be composite"

    def test_strong_pseudoprimes_composite(self):
        for n, fooled in STRONG_PSEUDOPRIMES:
            s, d = decompose(n)
            for a in WITNESSES[:fooled]:
                assert passes_witness(n, a, s, d), f"{n} should fool base {a}"
            assert not miller_rabin(n), f"strong pseudoprime {n} should be composite"

    def test_u64_max_composite(self):
        # 2^64 - 1 = 3 * 5 * 17 * 257 * 641 * 65537 * 6700417
        assert not miller_rabin(2**64 - 1)

    def test_products_of_large_primes_composite(self):
        assert not miller_rabin(4294967291 * 4294967279)
        assert not miller_rabin((2**31 - 1) ** 2)


class TestSieveAgreement:
    """Miller-Rabin matches an independently sieved window above 2^32."""

    WINDOW = 2000

    def _samples(self):
        rng = np.random.default_rng(20240101)
        samples = [2**32 + 1, 2**36 - 5, 2**40 - 87]
        samples.extend(int(v) for v in rng.integers(2**32, 2**40, size=5))
        return samples

    def test_window_agreement(self):
        engine = PrimeEngine()
        for n in self._samples():
            lo, hi = n - self.WINDOW, n + self.WINDOW
            base = engine.get_primes_up_to(isqrt(hi))
            sieved = sieve_segment(lo, hi, base)
            tested = [m for m in range(lo, hi + 1) if miller_rabin(m)]
            assert sieved == tested, f"sieve and Miller-Rabin disagree around {n}"
            assert sieved, f"window around {n} should contain primes"


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

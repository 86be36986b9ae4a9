"""
Deterministic Miller-Rabin test for the unsigned 64-bit domain.

Responsibility: the witness test only. No cache access; the engine decides
what to do with a positive result.

With the first twelve primes as witnesses no composite below
3.3 * 10**24 passes, which covers every n <= 2**64 - 1, so the test is
exact (not probable) here.
"""

from typing import Tuple

WITNESSES: Tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def decompose(n: int) -> Tuple[int, int]:
    """
    Return (s, d) such that n - 1 = 2**s * d with d odd.

    Parameters
    ----------
    n : int
        Odd integer >= 3.

    Returns
    -------
    tuple
        (s, d)
    """
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1
    return s, d


def passes_witness(n: int, a: int, s: int, d: int) -> bool:
    """
    Return True iff n passes the strong probable-prime test to base a.

    Parameters
    ----------
    n : int
        Odd integer >= 3, not equal to a.
    a : int
        Witness base.
    s, d : int
        Decomposition of n - 1 from decompose().
    """
    x = pow(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = x * x % n
        if x == n - 1:
            return True
    return False


def miller_rabin(n: int) -> bool:
    """
    Exact primality of n for 0 <= n <= 2**64 - 1.

    Parameters
    ----------
    n : int
        Integer to test.

    Returns
    -------
    bool
        True iff n is prime.
    """
    if n < 2:
        return False
    if n in WITNESSES:
        return True
    if n % 2 == 0:
        return False

    s, d = decompose(n)
    for a in WITNESSES:
        # Bases above a small n act as a % n; base 2 alone settles n < 2047.
        if not passes_witness(n, a, s, d):
            return False
    return True

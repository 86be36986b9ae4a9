"""
Factorization utilities.

Responsibility: pure factorization steps. Primality is supplied by the
caller, so this file knows nothing about caches or sieves.
"""

from typing import Callable, List, Optional, Sequence

IsPrime = Callable[[int], bool]


def smallest_prime_factor(n: int, is_prime: IsPrime) -> int:
    """
    Return the smallest prime factor of n by trial division.

    Parameters
    ----------
    n : int
        Integer >= 2.
    is_prime : callable
        Exact primality test.

    Returns
    -------
    int
        Smallest prime factor (n itself when n is prime).
    """
    if is_prime(n):
        return n
    if n % 2 == 0:
        return 2
    c = 3
    while c * c <= n:
        # The first divisor found is always prime; the test keeps the cache warm.
        if n % c == 0 and is_prime(c):
            return c
        c += 2
    return n


def prime_factors(n: int, is_prime: IsPrime,
                  factor_rest: Optional[Callable[[int], Sequence[int]]] = None) -> List[int]:
    """
    Return the prime factors of n, ascending, with repetition.

    Parameters
    ----------
    n : int
        Integer to factor. n <= 1 has no factors.
    is_prime : callable
        Exact primality test.
    factor_rest : callable, optional
        Used to factor the cofactor n // p (e.g. a memoized version of this
        function). Defaults to plain recursion.

    Returns
    -------
    list
        Prime factors, e.g. 360 -> [2, 2, 2, 3, 3, 5].
    """
    if n <= 1:
        return []
    if factor_rest is None:
        def factor_rest(m):
            return prime_factors(m, is_prime)
    p = smallest_prime_factor(n, is_prime)
    if p == n:
        return [n]
    return [p] + list(factor_rest(n // p))


def distinct(factors: Sequence[int]) -> List[int]:
    """Deduplicate an ascending factor list, keeping order."""
    result = []
    for p in factors:
        if not result or result[-1] != p:
            result.append(p)
    return result


def totient(n: int, distinct_factors: Sequence[int]) -> int:
    """
    Euler's phi: n * prod(1 - 1/p) over the distinct prime factors of n.

    Computed exactly in integers. totient(0) is 0.
    """
    result = n
    for p in distinct_factors:
        result = result // p * (p - 1)
    return result

"""
Divisor utilities.

Responsibility: GCD/LCM and divisor enumeration. Integer square roots only;
a float sqrt can be off by one near 2**64 and miss a divisor.
"""

from math import gcd as _gcd
from math import isqrt
from typing import List, Optional

from .errors import InvalidInput


def _check_non_negative(n: int, name: str = 'n') -> int:
    if n < 0:
        raise InvalidInput(f"{name}={n} cannot be negative")
    return n


def integer_sqrt(n: int) -> int:
    """Floor of the square root of n, exact for any size."""
    return isqrt(_check_non_negative(n))


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of |a| and |b|; gcd(0, 0) == 0."""
    return _gcd(a, b)


def lcm(a: int, b: int) -> int:
    """Least common multiple of |a| and |b|; 0 if either is 0."""
    if a == 0 or b == 0:
        return 0
    return abs(a) * (abs(b) // gcd(a, b))


def are_coprime(a: int, b: int) -> bool:
    return gcd(a, b) == 1


def proper_divisors(n: int) -> List[int]:
    """
    Divisors of n other than n itself, ascending.

    0 and 1 have none.
    """
    _check_non_negative(n)
    if n <= 1:
        return []
    small = []
    large = []
    for i in range(1, isqrt(n) + 1):
        if n % i:
            continue
        small.append(i)
        j = n // i
        if j != i and j < n:
            large.append(j)
    return small + large[::-1]


def divisors(n: int, proper: Optional[List[int]] = None) -> List[int]:
    """All divisors of n, ascending. `proper` may carry precomputed proper divisors."""
    if proper is None:
        proper = proper_divisors(n)
    if n <= 1:
        return [n] if n == 1 else []
    return list(proper) + [n]


def sum_divisors(n: int, proper: Optional[List[int]] = None) -> int:
    return sum(divisors(n, proper))


def perfect_number(n: int, proper: Optional[List[int]] = None) -> int:
    """
    Classify n by the sum of its proper divisors.

    0 and 1 have no proper divisors and count as deficient.

    Returns
    -------
    int
        0 if perfect, -1 if deficient, 1 if abundant.
    """
    if n <= 1:
        _check_non_negative(n)
        return -1
    if proper is None:
        proper = proper_divisors(n)
    total = sum(proper)
    if total == n:
        return 0
    return -1 if total < n else 1

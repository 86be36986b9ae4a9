"""
Error taxonomy for the prime engine.

Every error derives from PrimeEngineError and from the builtin it
specializes, so callers may catch either.
"""

import operator

from .seed import U64_MAX


class PrimeEngineError(Exception):
    """Base class for all prime engine errors."""


class InvalidInput(PrimeEngineError, ValueError):
    """Argument outside the documented domain."""


class RangeExhausted(PrimeEngineError, OverflowError):
    """A navigation query has no answer <= U64_MAX."""


class SieveAllocationError(PrimeEngineError, MemoryError):
    """A sieve batch array could not be allocated."""


class ConfigError(PrimeEngineError, ValueError):
    """Invalid configuration contents."""


def check_u64(n, name: str = 'n') -> int:
    """
    Validate that n is an integer in the unsigned 64-bit domain.

    Parameters
    ----------
    n : int
        Value to validate. numpy integers are accepted.
    name : str
        Argument name used in the error message.

    Returns
    -------
    int
        n as a plain Python int.

    Raises
    ------
    InvalidInput
        If n is not an integer, is a bool, or lies outside [0, U64_MAX].
    """
    if isinstance(n, bool):
        raise InvalidInput(f"{name} must be an integer, got bool")
    try:
        value = operator.index(n)
    except TypeError:
        raise InvalidInput(f"{name} must be an integer, got {type(n).__name__}") from None
    if value < 0 or value > U64_MAX:
        raise InvalidInput(f"{name}={value} is outside [0, {U64_MAX}]")
    return value

"""
Probabilistic primality testing.

This module provides functions for:
- Miller-Rabin primality testing with a configurable number of witness rounds
- Drawing random probable primes of a given bit length

Miller-Rabin never rejects a prime, but a composite passes one round with
probability at most 1/4. With k rounds the false-positive rate is at most
4^-k; a True result is not a certificate of primality.
"""

import logging
from typing import Tuple

from .errors import InvalidArgument
from .random_source import random_bit_length, uniform_in_range


logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


def is_probably_prime(value: int, k: int = DEFAULT_ROUNDS) -> bool:
    """
    Miller-Rabin primality test.

    Probabilistic primality test with configurable confidence level.
    With 10 rounds, false positive rate is at most 1 in 4^10.

    Args:
        value: Number to test
        k: Number of witness rounds (default: 10, higher = more confident)

    Returns:
        True if probably prime, False if definitely composite

    Raises:
        InvalidArgument: If k < 1

    Example:
        >>> is_probably_prime(97)
        True
        >>> is_probably_prime(91)
        False
    """
    if k < 1:
        raise InvalidArgument(f"Witness rounds must be >= 1, got {k}")

    if value < 2:
        return False
    if value in (2, 3):
        return True
    if value % 2 == 0:
        return False

    # Write value-1 as 2^s * d with d odd
    s, d = 0, value - 1
    while d & 1 == 0:
        d >>= 1
        s += 1

    # Witness loop
    for _ in range(k):
        a = uniform_in_range(2, value - 2)
        x = pow(a, d, value)

        if x == 1 or x == value - 1:
            continue

        for _ in range(s - 1):
            x = pow(x, 2, value)
            if x == 1:
                return False
            if x == value - 1:
                break
        else:
            return False

    return True


def generate_probable_prime(bit_length: int, k: int = DEFAULT_ROUNDS) -> Tuple[int, int]:
    """
    Draw random odd integers of ``bit_length`` bits until one passes Miller-Rabin.

    Args:
        bit_length: Exact bit length of the result, must be >= 2
        k: Witness rounds per candidate

    Returns:
        Tuple of (probable_prime, candidates_drawn)

    Raises:
        InvalidArgument: If bit_length < 2 (no odd prime has a single bit)

    Example:
        >>> p, attempts = generate_probable_prime(32)
        >>> p.bit_length(), attempts >= 1
        (32, True)
    """
    if bit_length < 2:
        raise InvalidArgument(f"No odd prime has bit length {bit_length}")

    attempts = 0
    while True:
        attempts += 1
        candidate = random_bit_length(bit_length, force_odd=True)
        if is_probably_prime(candidate, k):
            logger.debug(f"Found {bit_length}-bit probable prime after {attempts} candidate(s)")
            return candidate, attempts

"""
Integer arithmetic helpers.

This module provides functions for:
- Integer square root (Newton's method)
- Perfect square detection
- Trial division factorization
- Brute-force divisor counting
"""

from typing import List, Tuple


def isqrt(n: int) -> int:
    """
    Integer square root using Newton's method.

    Args:
        n: Number to take the root of

    Returns:
        floor(sqrt(n)) for n >= 0, 0 for n <= 0

    Example:
        >>> isqrt(1000000)
        1000
        >>> isqrt(99)
        9
    """
    if n <= 0:
        return 0
    x = n >> 1
    if x == 0:
        return n  # n == 1

    while True:
        last = x
        x = (x + n // x) >> 1
        if abs(x - last) <= 1:
            break

    # Newton can settle one above the floor when the iterates oscillate
    while x * x > n:
        x -= 1
    return x


def is_perfect_square(n: int) -> bool:
    """Return True if n is the square of a non-negative integer."""
    if n < 0:
        return False
    root = isqrt(n)
    return root * root == n


def trial_division(n: int, limit: int = 10**4) -> Tuple[List[int], int]:
    """
    Strip prime factors up to ``limit`` by trial division.

    Divides out 2, 3 and 5 first, then every odd candidate from 7 up. No
    divisor above ``limit`` is tried, so a limit below 5 skips the larger
    wheel primes as well.

    Args:
        n: Number to factor (n >= 1)
        limit: Largest trial divisor (default: 10^4)

    Returns:
        Tuple of (factors_found, cofactor)

    Example:
        >>> factors, cofactor = trial_division(360)
        >>> factors
        [2, 2, 2, 3, 3, 5]
        >>> cofactor
        1
    """
    factors = []
    cofactor = n

    for p in (2, 3, 5):
        if p > limit:
            return factors, cofactor
        while cofactor % p == 0 and cofactor > 1:
            factors.append(p)
            cofactor //= p

    i = 7
    while i * i <= cofactor and i <= limit:
        while cofactor % i == 0:
            factors.append(i)
            cofactor //= i
        i += 2

    # Whatever is left below limit**2 with no factor up to its root is prime
    if 1 < cofactor and cofactor < i * i:
        factors.append(cofactor)
        cofactor = 1

    return factors, cofactor


def count_divisors_trial(n: int) -> int:
    """
    Count the positive divisors of n by checking every i up to isqrt(n).

    Only practical for small n; used as a reference for the Pollard's Rho
    based ``count_divisors``.

    Args:
        n: Number whose divisors are counted

    Returns:
        Number of divisors (0 for n <= 1)

    Example:
        >>> count_divisors_trial(12)
        6
    """
    if n <= 1:
        return 0
    if n == 2:
        return 2

    count = 0
    limit = isqrt(n)
    for i in range(1, limit + 1):
        if n % i == 0:
            count += 1
            if i != n // i:
                count += 1
    return count

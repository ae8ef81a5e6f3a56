"""
Integer factorization with Pollard's Rho.

This module provides functions for:
- Finding a non-trivial divisor of a composite (Pollard's Rho, Floyd cycle detection)
- Full decomposition into a prime -> exponent multiset
- Divisor counting from the prime exponents

Pollard's Rho is randomized and has no useful worst-case bound, so
``find_divisor`` runs under a restart/iteration budget and raises
FactorizationTimeout when it is spent. Pass ``None`` for both limits to get
the unbounded behaviour.
"""

import logging
import math
from collections import Counter
from typing import Optional

from .errors import FactorizationTimeout, InvalidArgument
from .int_math import isqrt, is_perfect_square, trial_division
from .primality import DEFAULT_ROUNDS, is_probably_prime
from .random_source import uniform_in_range


logger = logging.getLogger(__name__)

DEFAULT_MAX_RESTARTS = 64
DEFAULT_MAX_ITERATIONS = 2_000_000
DEFAULT_TRIAL_LIMIT = 10_000


def find_divisor(n: int,
                 max_restarts: Optional[int] = DEFAULT_MAX_RESTARTS,
                 max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS) -> int:
    """
    Find a non-trivial divisor of a composite using Pollard's Rho.

    Iterates f(v) = (v^2 + c) mod n with the tortoise advancing one step and
    the hare two. When gcd(|x - y|, n) collapses to n the sequence is reseeded.

    Args:
        n: Composite number (n >= 4). An odd prime never yields a divisor and
            ends in FactorizationTimeout (or loops forever when unbounded).
        max_restarts: Reseedings allowed after the first attempt (None = unlimited)
        max_iterations: Total iteration steps allowed (None = unlimited)

    Returns:
        Divisor d with 1 < d < n

    Raises:
        InvalidArgument: If n < 4
        FactorizationTimeout: If the budget runs out

    Example:
        >>> find_divisor(8051) in (83, 97)
        True
    """
    if n < 4:
        raise InvalidArgument(f"{n} has no non-trivial divisor")
    if n % 2 == 0:
        return 2

    restarts = 0
    iterations = 0

    while True:
        x = y = uniform_in_range(2, n - 2)
        c = uniform_in_range(1, n - 1)

        g = 1
        while g == 1:
            if max_iterations is not None and iterations >= max_iterations:
                raise FactorizationTimeout(n, restarts, iterations, "iteration limit reached")
            iterations += 1

            x = (x * x + c) % n
            y = (y * y + c) % n
            y = (y * y + c) % n
            g = math.gcd(abs(x - y), n)

        if g != n:
            logger.debug(f"Pollard rho split {n.bit_length()}-bit value after "
                         f"{iterations} iteration(s), {restarts} restart(s)")
            return g

        # Cycle closed without exposing a factor
        if max_restarts is not None and restarts >= max_restarts:
            raise FactorizationTimeout(n, restarts, iterations, "restart limit reached")
        restarts += 1
        logger.debug(f"Pollard rho cycle collapsed, reseeding (restart {restarts})")


def factor_fully(n: int,
                 k: int = DEFAULT_ROUNDS,
                 max_restarts: Optional[int] = DEFAULT_MAX_RESTARTS,
                 max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS,
                 trial_limit: int = DEFAULT_TRIAL_LIMIT) -> Counter:
    """
    Decompose n into prime factors with exponents.

    Small primes are stripped by trial division first. The remaining cofactor
    goes onto a worklist; each entry is either counted as a (probable) prime,
    split as a perfect square, or split by Pollard's Rho with both halves
    pushed back.

    Args:
        n: Number to factor
        k: Miller-Rabin rounds used to recognise primes
        max_restarts: Passed to find_divisor
        max_iterations: Passed to find_divisor (budget per split)
        trial_limit: Largest trial divisor, 0 to skip trial division

    Returns:
        Counter mapping prime -> exponent (empty for n < 2)

    Raises:
        FactorizationTimeout: If a split runs out of budget

    Example:
        >>> sorted(factor_fully(60).items())
        [(2, 2), (3, 1), (5, 1)]
    """
    factors: Counter = Counter()
    if n < 2:
        return factors

    if trial_limit > 0:
        small, cofactor = trial_division(n, trial_limit)
        factors.update(small)
    else:
        cofactor = n

    pending = [cofactor]
    while pending:
        m = pending.pop()
        if m < 2:
            continue

        if is_probably_prime(m, k):
            factors[m] += 1
            continue

        if is_perfect_square(m):
            root = isqrt(m)
            pending.extend((root, root))
            continue

        d = find_divisor(m, max_restarts=max_restarts, max_iterations=max_iterations)
        pending.extend((d, m // d))

    return factors


def count_divisors(n: int,
                   k: int = DEFAULT_ROUNDS,
                   max_restarts: Optional[int] = DEFAULT_MAX_RESTARTS,
                   max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS,
                   trial_limit: int = DEFAULT_TRIAL_LIMIT) -> int:
    """
    Count the positive divisors of n (including 1 and n).

    Uses the prime exponents from factor_fully: d(n) = prod(e_i + 1).

    Returns:
        Divisor count, 0 for n <= 1

    Raises:
        FactorizationTimeout: If factoring n runs out of budget

    Example:
        >>> count_divisors(60)
        12
    """
    if n <= 1:
        return 0
    if n == 2:
        return 2

    factors = factor_fully(n, k=k, max_restarts=max_restarts,
                           max_iterations=max_iterations, trial_limit=trial_limit)
    return divisor_count_from_factors(factors)


def divisor_count_from_factors(factors: Counter) -> int:
    """Number of divisors of the product described by a prime -> exponent map."""
    return math.prod(exponent + 1 for exponent in factors.values())


def format_factorization(factors: Counter) -> str:
    """Render a factor multiset as e.g. '2^2 × 3 × 5'."""
    return ' × '.join(
        f"{p}^{e}" if e > 1 else str(p)
        for p, e in sorted(factors.items())
    )

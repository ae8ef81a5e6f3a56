"""
primekit - random big integers, Miller-Rabin primality and Pollard's Rho factorization.
"""
from .errors import FactorizationTimeout, InvalidArgument, PrimekitError
from .factorization import count_divisors, factor_fully, find_divisor
from .int_math import isqrt
from .primality import generate_probable_prime, is_probably_prime
from .random_source import random_bit_length, uniform_in_range

__all__ = [
    "FactorizationTimeout",
    "InvalidArgument",
    "PrimekitError",
    "count_divisors",
    "factor_fully",
    "find_divisor",
    "generate_probable_prime",
    "is_probably_prime",
    "isqrt",
    "random_bit_length",
    "uniform_in_range",
]

"""
Pytest configuration for primekit tests.

Adds the repository root to the Python path so tests can import
'primekit' and 'prime_gen' without installing the package.
"""
import sys
from pathlib import Path

import pytest

root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))


def _sieve(limit: int):
    flags = [True] * (limit + 1)
    flags[0] = flags[1] = False
    for p in range(2, int(limit ** 0.5) + 1):
        if flags[p]:
            flags[p * p::p] = [False] * len(range(p * p, limit + 1, p))
    return flags


@pytest.fixture(scope="session")
def prime_flags():
    """Primality table for 0..10^6, used as ground truth."""
    return _sieve(10**6)

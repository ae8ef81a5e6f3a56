"""
Random integer source backed by the operating system's CSPRNG.

Provides:
- Uniform sampling from a closed integer range (rejection sampling)
- Fixed bit-length integers with the top bit set, optionally odd

Every call draws fresh bytes from the ``secrets`` module; nothing is cached
between calls, so the functions are safe to use from several threads or
processes at once.
"""

import logging
import secrets

from .errors import InvalidArgument


logger = logging.getLogger(__name__)


def uniform_in_range(minimum: int, maximum: int) -> int:
    """
    Return an integer drawn uniformly from the closed interval [minimum, maximum].

    Draws the minimal number of random bytes that can hold the span, drops
    the bits above the span's bit length and rejects draws that fall outside
    the span. No modulo bias.

    Args:
        minimum: Lower bound (inclusive), must be >= 0
        maximum: Upper bound (inclusive), must be >= minimum

    Returns:
        Random integer in [minimum, maximum]

    Raises:
        InvalidArgument: If minimum < 0 or minimum > maximum

    Example:
        >>> 5 <= uniform_in_range(5, 9) <= 9
        True
    """
    if minimum < 0:
        raise InvalidArgument(f"Range minimum must be non-negative, got {minimum}")
    if minimum > maximum:
        raise InvalidArgument(f"Range minimum {minimum} exceeds maximum {maximum}")

    span = maximum - minimum + 1
    bits = span.bit_length()
    byte_count = (bits + 7) // 8
    mask = (1 << bits) - 1

    while True:
        candidate = int.from_bytes(secrets.token_bytes(byte_count), 'little') & mask
        if candidate < span:
            return minimum + candidate


def random_bit_length(bit_length: int, force_odd: bool = False) -> int:
    """
    Return a random integer of exactly ``bit_length`` bits.

    The most significant bit is always set, so the value lies in
    [2**(bit_length - 1), 2**bit_length - 1]. With ``force_odd`` the least
    significant bit is set as well.

    Args:
        bit_length: Number of bits, must be >= 1
        force_odd: Force the low bit to 1

    Returns:
        Random non-negative integer with the requested bit length

    Raises:
        InvalidArgument: If bit_length < 1

    Example:
        >>> random_bit_length(64, force_odd=True).bit_length()
        64
    """
    if isinstance(bit_length, bool) or not isinstance(bit_length, int):
        raise InvalidArgument(f"bit_length must be an integer, got {bit_length!r}")
    if bit_length < 1:
        raise InvalidArgument(f"bit_length must be >= 1, got {bit_length}")

    byte_count = (bit_length + 7) // 8
    value = int.from_bytes(secrets.token_bytes(byte_count), 'little')

    # Keep the low bit_length bits, then force the top one
    value &= (1 << bit_length) - 1
    value |= 1 << (bit_length - 1)

    if force_odd:
        value |= 1

    return value

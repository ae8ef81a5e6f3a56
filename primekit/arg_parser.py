#!/usr/bin/env python3
"""
Argument parsing for the prime-gen command line tool.
"""
import argparse
from typing import List, Optional

MODES = ('odd', 'prime')
MIN_BITS = 32


def parse_int_with_scientific(value: str) -> int:
    """
    Parse a non-negative integer from string, supporting scientific notation.

    Examples:
        "2000000" -> 2000000
        "2e6" -> 2000000
        "1.5e3" -> 1500

    Raises:
        argparse.ArgumentTypeError: If value cannot be parsed or is negative
    """
    try:
        stripped = value.strip()
        # Plain integers go through int() so large values keep full precision
        result = int(stripped) if stripped.lstrip('+-').isdigit() else int(float(stripped))
    except (ValueError, OverflowError) as e:
        raise argparse.ArgumentTypeError(f"Invalid integer or scientific notation: {value}") from e
    if result < 0:
        raise argparse.ArgumentTypeError(f"Value must be positive: {value}")
    return result


def parse_bits(value: str) -> int:
    """Parse the <bits> positional."""
    try:
        return int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid 'bits' argument: '{value}' is not an integer."
        ) from e


def parse_mode(value: str) -> str:
    """Parse the <mode> positional (case-insensitive, surrounding whitespace ignored)."""
    mode = value.strip().lower()
    if mode not in MODES:
        raise argparse.ArgumentTypeError(
            f"Invalid 'option': '{mode}'. Must be 'odd' or 'prime'."
        )
    return mode


def parse_count(value: str) -> int:
    """Parse the optional <count> positional."""
    try:
        count = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid 'count' argument: '{value}' is not an integer."
        ) from e
    if count < 1:
        raise argparse.ArgumentTypeError("Invalid 'count' argument: must be >= 1.")
    return count


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for prime-gen."""
    parser = argparse.ArgumentParser(
        prog='prime-gen',
        description='Generate random probable primes, or random odd numbers with their divisor counts',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Arguments:
  bits   - number of bits (multiple of 8, >= 32)
  option - 'odd' or 'prime'
  count  - how many numbers to generate (default 1)

Examples:
  # One 512-bit probable prime
  prime-gen 512 prime

  # Ten 64-bit odd numbers with divisor counts, 8 workers
  prime-gen 64 odd 10 --workers 8

  # Odd numbers with a tighter Pollard rho budget
  prime-gen 128 odd 4 --max-iterations 5e5 --show-factors
"""
    )

    parser.add_argument('bits', type=parse_bits, help='Bit length of each generated number')
    parser.add_argument('mode', type=parse_mode, help="'odd' or 'prime'")
    parser.add_argument('count', type=parse_count, nargs='?', default=1,
                        help='How many numbers to generate (default: 1)')

    # Configuration
    parser.add_argument('--config', help='Config file path (default: primekit.yaml if present)')
    parser.add_argument('--any-bits', action='store_true',
                        help=f'Allow any bit length, not only multiples of 8 >= {MIN_BITS}')

    # Overrides for config values
    parser.add_argument('--workers', type=int, help='Number of parallel worker processes')
    parser.add_argument('--rounds', '-k', type=int, help='Miller-Rabin witness rounds')
    parser.add_argument('--max-restarts', type=parse_int_with_scientific,
                        help='Pollard rho reseedings allowed per split')
    parser.add_argument('--max-iterations', type=parse_int_with_scientific,
                        help='Pollard rho iteration budget per split (supports scientific notation, e.g., 2e6)')
    parser.add_argument('--unbounded', action='store_true',
                        help='Disable the Pollard rho budget (may never finish)')

    # Output
    parser.add_argument('--show-factors', action='store_true',
                        help='Print the prime factorization in odd mode')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress result output')

    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """
    Cross-argument checks that argparse types cannot express.

    Calls parser.error() (exit status 2) on failure.
    """
    if args.any_bits:
        minimum = 2 if args.mode == 'prime' else 1
        if args.bits < minimum:
            parser.error(f"Invalid 'bits' argument: must be >= {minimum} for '{args.mode}' mode.")
    elif args.bits < MIN_BITS or args.bits % 8 != 0:
        parser.error(f"Invalid 'bits' argument: must be multiple of 8 and >= {MIN_BITS}.")

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")
    if args.rounds is not None and args.rounds < 1:
        parser.error("--rounds must be >= 1")
    if args.max_iterations is not None and args.max_iterations < 1:
        parser.error("--max-iterations must be >= 1")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate command line arguments."""
    parser = create_parser()
    args = parser.parse_args(argv)
    validate_args(parser, args)
    return args

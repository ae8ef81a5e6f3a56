#!/usr/bin/env python3
"""
prime-gen - random probable primes and divisor counts from the command line

Usage:
    prime-gen <bits> <odd|prime> [count] [options]

Prime mode prints `count` probable primes of exactly `bits` bits. Odd mode
prints `count` random odd numbers of `bits` bits, each followed by its
number of divisors.

Settings come from primekit.yaml (and primekit.local.yaml) when present;
command line options override them.
"""

import sys
from pathlib import Path
from typing import List, Optional

import yaml

from primekit.arg_parser import parse_args
from primekit.generator import NumberGenerator, setup_logging
from primekit.typed_config import AppConfig, TypedConfigLoader
from primekit.user_output import UserOutput

DEFAULT_CONFIG = 'primekit.yaml'


def load_config(args) -> AppConfig:
    """Load the config file, then apply command line overrides."""
    if args.config:
        config = TypedConfigLoader().load(args.config)
    elif Path(DEFAULT_CONFIG).exists():
        config = TypedConfigLoader().load(DEFAULT_CONFIG)
    else:
        config = AppConfig()

    if args.workers is not None:
        config.execution.workers = args.workers
    if args.rounds is not None:
        config.primality.rounds = args.rounds
    if args.max_restarts is not None:
        config.factorization.max_restarts = args.max_restarts
    if args.max_iterations is not None:
        config.factorization.max_iterations = args.max_iterations
    if args.unbounded:
        config.factorization.max_restarts = None
        config.factorization.max_iterations = None
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for prime-gen."""
    args = parse_args(argv)
    output = UserOutput(quiet=args.quiet)

    try:
        config = load_config(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        output.error(str(e), log=False)
        return 2

    setup_logging(config.logging)

    generator = NumberGenerator(config, output=output, show_factors=args.show_factors)
    try:
        report = generator.run(args.bits, args.mode, args.count)
    except KeyboardInterrupt:
        output.error("Interrupted by user", log=False)
        return 130

    # Timeouts are reported per number; flag them in the exit status
    return 1 if report.failures else 0


if __name__ == '__main__':
    sys.exit(main())

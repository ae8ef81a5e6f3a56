"""
User Output Abstraction

Keeps the generator's console lines (results, timing, usage errors) apart
from debug logging. Results go to stdout, errors to stderr.
"""

import datetime
import logging
import sys
from typing import Optional, TextIO


class UserOutput:
    """
    Handler for user-facing output.

    Usage:
        output = UserOutput()
        output.header(64)
        output.number(1, 18446744073709551557)
        output.divisor_count(2)
        output.elapsed(datetime.timedelta(seconds=0.12))
    """

    def __init__(
        self,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        quiet: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize output handler.

        Args:
            stdout: Output stream for normal messages (default: sys.stdout)
            stderr: Output stream for errors (default: sys.stderr)
            quiet: If True, suppress all non-error output
            logger: Optional logger for warnings and errors
        """
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.logger = logger or logging.getLogger(__name__)

    def info(self, message: str, log: bool = False) -> None:
        if not self.quiet:
            print(message, file=self.stdout)
        if log:
            self.logger.info(message)

    def error(self, message: str, log: bool = True) -> None:
        """Print error message to user (always shown, even in quiet mode)."""
        print(f"Error: {message}", file=self.stderr)
        if log:
            self.logger.error(message)

    def header(self, bits: int) -> None:
        self.info(f"BitLength:{bits} bits")

    def number(self, index: int, value: int) -> None:
        self.info(f"{index}:{value}")

    def divisor_count(self, count: Optional[int], reason: Optional[str] = None) -> None:
        """Print the divisor count line; ``None`` means the factorization failed."""
        if count is None:
            self.info(f"Number of factors:unknown ({reason or 'factorization failed'})")
        else:
            self.info(f"Number of factors:{count}")

    def factorization(self, rendered: str) -> None:
        self.info(f"Factorization:{rendered}")

    def elapsed(self, duration: datetime.timedelta) -> None:
        self.info(f"Time to Generate:{duration}")

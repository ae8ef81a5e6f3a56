"""
Exception types raised by the primekit core.
"""
from typing import Optional


class PrimekitError(Exception):
    """Base class for all primekit errors."""


class InvalidArgument(PrimekitError, ValueError):
    """Raised when a core operation is called with an out-of-contract argument."""


class FactorizationTimeout(PrimekitError, RuntimeError):
    """
    Raised when Pollard's Rho spends its retry budget without finding a divisor.

    The failure is local to one input: callers can drop the partial result
    and move on to the next number.
    """

    def __init__(self, n: int, restarts: int, iterations: int,
                 reason: Optional[str] = None):
        self.n = n
        self.restarts = restarts
        self.iterations = iterations
        self.reason = reason or "retry budget exhausted"
        super().__init__(
            f"No divisor of {n.bit_length()}-bit value found after "
            f"{restarts} restart(s) and {iterations} iteration(s): {self.reason}"
        )

#!/usr/bin/env python3
"""
NumberGenerator - runs one generation job per requested number on a worker pool.

Handles:
- Prime mode: draw odd candidates until one passes Miller-Rabin
- Odd mode: draw one odd number and count its divisors with Pollard's Rho
- Process pool scheduling, result ordering and console reporting
- Per-job factorization timeouts (reported, not fatal)
"""
import datetime
import functools
import logging
import time
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .errors import FactorizationTimeout, InvalidArgument
from .factorization import divisor_count_from_factors, factor_fully, format_factorization
from .primality import generate_probable_prime
from .random_source import random_bit_length
from .typed_config import AppConfig, LoggingConfig
from .user_output import UserOutput

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a single generation job."""

    value: int
    mode: str
    index: int = 0  # 1-based print order, assigned when the job is collected
    divisor_count: Optional[int] = None
    factors: Dict[int, int] = field(default_factory=dict)
    attempts: int = 1
    error: Optional[str] = None
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class GenerationReport:
    """All results of one generate() call."""

    bits: int
    mode: str
    results: List[GenerationResult] = field(default_factory=list)
    elapsed: datetime.timedelta = datetime.timedelta(0)

    @property
    def failures(self) -> List[GenerationResult]:
        return [r for r in self.results if not r.success]


def run_prime_job(bits: int, rounds: int) -> GenerationResult:
    """Worker function for prime mode (module level so it pickles)."""
    t0 = time.perf_counter()
    prime, attempts = generate_probable_prime(bits, rounds)
    return GenerationResult(
        value=prime,
        mode='prime',
        attempts=attempts,
        elapsed=time.perf_counter() - t0,
    )


def run_odd_job(bits: int, rounds: int, max_restarts: Optional[int],
                max_iterations: Optional[int], trial_limit: int) -> GenerationResult:
    """Worker function for odd mode (module level so it pickles)."""
    t0 = time.perf_counter()
    value = random_bit_length(bits, force_odd=True)
    result = GenerationResult(value=value, mode='odd')

    try:
        factors = factor_fully(value, k=rounds, max_restarts=max_restarts,
                               max_iterations=max_iterations, trial_limit=trial_limit)
    except FactorizationTimeout as e:
        result.error = str(e)
    else:
        result.factors = dict(factors)
        result.divisor_count = divisor_count_from_factors(factors) if value > 1 else 0

    result.elapsed = time.perf_counter() - t0
    return result


def setup_logging(config: LoggingConfig) -> None:
    """Set up logging configuration."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        config.ensure_log_dir_exists()
        handlers.insert(0, logging.FileHandler(Path(config.file)))

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


class NumberGenerator:
    """Schedules generation jobs and reports their results."""

    def __init__(self, config: Optional[AppConfig] = None,
                 output: Optional[UserOutput] = None,
                 show_factors: bool = False):
        """
        Initialize generator.

        Args:
            config: Typed configuration (defaults when None)
            output: UserOutput for console lines (creates one if not provided)
            show_factors: Also print the factorization in odd mode
        """
        self.config = config or AppConfig()
        self.output = output or UserOutput()
        self.show_factors = show_factors
        self.logger = logging.getLogger(f"{__name__}.NumberGenerator")

    def _job(self, bits: int, mode: str) -> Callable[[], GenerationResult]:
        """Return a picklable zero-argument callable running one job of the given mode."""
        rounds = self.config.primality.rounds
        if mode == 'prime':
            return functools.partial(run_prime_job, bits, rounds)
        if mode == 'odd':
            return functools.partial(run_odd_job, bits, rounds,
                                     **self.config.factorization.as_kwargs())
        raise InvalidArgument(f"Mode must be 'odd' or 'prime', got {mode!r}")

    def generate(self, bits: int, mode: str, count: int = 1,
                 on_result: Optional[Callable[[GenerationResult], None]] = None) -> GenerationReport:
        """
        Run ``count`` jobs and collect their results.

        Results are indexed 1..count in completion order. ``on_result`` is
        called from this thread for each result as it arrives.

        Raises:
            InvalidArgument: If bits/mode/count are out of range
        """
        if count < 1:
            raise InvalidArgument(f"count must be >= 1, got {count}")
        if bits < 1:
            raise InvalidArgument(f"bits must be >= 1, got {bits}")
        job = self._job(bits, mode)

        report = GenerationReport(bits=bits, mode=mode)
        workers = min(self.config.execution.workers, count)
        self.logger.info(f"Generating {count} {bits}-bit value(s) in {mode} mode with {workers} worker(s)")
        start = time.perf_counter()

        def collect(result: GenerationResult) -> None:
            result.index = len(report.results) + 1
            report.results.append(result)
            if result.error:
                self.logger.warning(f"Job {result.index}: {result.error}")
            if on_result:
                on_result(result)

        if workers == 1:
            for _ in range(count):
                collect(job())
        else:
            self._run_pool(job, count, workers, collect)

        report.elapsed = datetime.timedelta(seconds=time.perf_counter() - start)
        self.logger.info(f"Generated {len(report.results)} value(s) in {report.elapsed}, "
                         f"{len(report.failures)} factorization timeout(s)")
        return report

    def _run_pool(self, job: Callable[[], GenerationResult], count: int, workers: int,
                  collect: Callable[[GenerationResult], None]) -> None:
        """Run ``count`` copies of ``job`` on a process pool, collecting as they finish."""
        executor = ProcessPoolExecutor(max_workers=workers)
        interrupted = False
        try:
            futures = [executor.submit(job) for _ in range(count)]
            for future in as_completed(futures):
                try:
                    result = future.result()
                except Exception as e:
                    self.logger.error(f"Worker process error: {e}")
                    for pending in futures:
                        pending.cancel()
                    raise
                collect(result)
        except KeyboardInterrupt:
            interrupted = True
            self.logger.warning("Interrupted, cancelling outstanding jobs")
            raise
        finally:
            # Running jobs are abandoned on interrupt instead of awaited
            executor.shutdown(wait=not interrupted, cancel_futures=interrupted)

    def print_result(self, result: GenerationResult) -> None:
        """Print one result in the tool's output format."""
        self.output.number(result.index, result.value)
        if result.mode != 'odd':
            return
        if result.success:
            self.output.divisor_count(result.divisor_count)
            if self.show_factors and result.factors:
                self.output.factorization(format_factorization(Counter(result.factors)))
        else:
            self.output.divisor_count(None, reason="factorization timed out")

    def run(self, bits: int, mode: str, count: int = 1) -> GenerationReport:
        """Print the header, generate and print each result, then print timing."""
        self.output.header(bits)
        report = self.generate(bits, mode, count, on_result=self.print_result)
        self.output.elapsed(report.elapsed)
        return report

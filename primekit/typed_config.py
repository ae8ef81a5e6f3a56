"""
Typed Configuration Classes

Provides type-safe access to configuration values loaded from YAML.
Every section has defaults, so an empty or missing file yields a usable
AppConfig.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

from .errors import InvalidArgument
from .factorization import DEFAULT_MAX_ITERATIONS, DEFAULT_MAX_RESTARTS, DEFAULT_TRIAL_LIMIT
from .primality import DEFAULT_ROUNDS


def _check_int(name: str, value: Any, minimum: int, allow_none: bool = False) -> None:
    """Raise InvalidArgument unless value is an int >= minimum (bools rejected)."""
    if value is None and allow_none:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {value}")


@dataclass
class PrimalityConfig:
    """Miller-Rabin configuration."""
    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self):
        _check_int("primality.rounds", self.rounds, 1)


@dataclass
class FactorizationConfig:
    """Pollard's Rho budget and trial division settings."""
    max_restarts: Optional[int] = DEFAULT_MAX_RESTARTS  # None = unlimited
    max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS  # None = unlimited
    trial_division_limit: int = DEFAULT_TRIAL_LIMIT

    def __post_init__(self):
        _check_int("factorization.max_restarts", self.max_restarts, 0, allow_none=True)
        _check_int("factorization.max_iterations", self.max_iterations, 1, allow_none=True)
        _check_int("factorization.trial_division_limit", self.trial_division_limit, 0)

    def as_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for factor_fully / count_divisors."""
        return {
            'max_restarts': self.max_restarts,
            'max_iterations': self.max_iterations,
            'trial_limit': self.trial_division_limit,
        }


@dataclass
class ExecutionConfig:
    """Worker pool configuration."""
    workers: int = 4

    def __post_init__(self):
        _check_int("execution.workers", self.workers, 1)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    file: Optional[str] = "data/logs/primekit.log"  # None = console only
    level: str = "INFO"

    def __post_init__(self):
        if self.file is not None and not isinstance(self.file, str):
            raise InvalidArgument(f"logging.file must be a path string or null, got {self.file!r}")
        if not isinstance(self.level, str):
            raise InvalidArgument(f"logging.level must be a level name, got {self.level!r}")

    def ensure_log_dir_exists(self) -> None:
        """Create log directory if it doesn't exist."""
        if self.file:
            Path(self.file).parent.mkdir(parents=True, exist_ok=True)


@dataclass
class AppConfig:
    """
    Root configuration object.

    Usage:
        config = TypedConfigLoader().load("primekit.yaml")
        print(config.primality.rounds)
        print(config.factorization.max_iterations)
    """
    primality: PrimalityConfig = field(default_factory=PrimalityConfig)
    factorization: FactorizationConfig = field(default_factory=FactorizationConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class TypedConfigLoader:
    """
    Load configuration from YAML into typed dataclasses.

    Usage:
        loader = TypedConfigLoader()
        config = loader.load("primekit.yaml")
    """

    def load(self, config_path: str) -> AppConfig:
        """
        Load configuration from YAML file (plus its .local.yaml override).

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidArgument: If a value has the wrong type or is out of range
        """
        from .config_manager import ConfigManager

        raw_config = ConfigManager().load_config(config_path)
        return self.parse(raw_config)

    def parse(self, raw: Dict[str, Any]) -> AppConfig:
        """
        Parse raw dictionary into typed config.

        Raises:
            InvalidArgument: If the layout or a value has the wrong type or range
        """
        if not isinstance(raw, dict):
            raise InvalidArgument(f"Configuration must be a mapping of sections, got {type(raw).__name__}")
        return AppConfig(
            primality=self._parse_primality(self._section(raw, 'primality')),
            factorization=self._parse_factorization(self._section(raw, 'factorization')),
            execution=self._parse_execution(self._section(raw, 'execution')),
            logging=self._parse_logging(self._section(raw, 'logging')),
        )

    def _section(self, raw: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = raw.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise InvalidArgument(f"{name} section must be a mapping, got {section!r}")
        return section

    def _parse_primality(self, raw: Dict[str, Any]) -> PrimalityConfig:
        return PrimalityConfig(
            rounds=raw.get('rounds', DEFAULT_ROUNDS),
        )

    def _parse_factorization(self, raw: Dict[str, Any]) -> FactorizationConfig:
        return FactorizationConfig(
            max_restarts=raw.get('max_restarts', DEFAULT_MAX_RESTARTS),
            max_iterations=raw.get('max_iterations', DEFAULT_MAX_ITERATIONS),
            trial_division_limit=raw.get('trial_division_limit', DEFAULT_TRIAL_LIMIT),
        )

    def _parse_execution(self, raw: Dict[str, Any]) -> ExecutionConfig:
        return ExecutionConfig(
            workers=raw.get('workers', 4),
        )

    def _parse_logging(self, raw: Dict[str, Any]) -> LoggingConfig:
        return LoggingConfig(
            file=raw.get('file', 'data/logs/primekit.log'),
            level=raw.get('level', 'INFO'),
        )

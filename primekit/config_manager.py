"""
Configuration Manager Utility

Loads primekit.yaml and deep merges an optional primekit.local.yaml sitting
next to it.
"""

import logging
from pathlib import Path
from typing import Dict, Any

import yaml

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Load YAML configuration with automatic local overrides.

    For a base file ``primekit.yaml`` the manager looks for
    ``primekit.local.yaml`` in the same directory and merges it on top.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.ConfigManager")

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file with automatic local overrides.

        Args:
            config_path: Path to base configuration file (e.g., 'primekit.yaml')

        Returns:
            Merged configuration dictionary

        Raises:
            FileNotFoundError: If base config file doesn't exist
            yaml.YAMLError: If the base file cannot be parsed
            ValueError: If the base file is not a mapping
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}"
            )

        self.logger.debug(f"Loading base configuration from: {config_path}")
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if not config:
            self.logger.warning(f"Configuration file is empty: {config_path}")
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(
                f"Configuration file must contain a mapping of sections: {config_path}"
            )

        local_config_path = self._get_local_config_path(config_file)

        if not local_config_path.exists():
            self.logger.debug(
                f"No local configuration file found at {local_config_path}"
            )
            return config

        self.logger.info(
            f"Loading local configuration overrides from: {local_config_path}"
        )
        try:
            with open(local_config_path, 'r', encoding='utf-8') as f:
                local_config = yaml.safe_load(f)
        except (yaml.YAMLError, OSError) as e:
            # A broken override file should not stop the run
            self.logger.error(
                f"Failed to load local configuration {local_config_path}: {e}"
            )
            return config

        if isinstance(local_config, dict):
            config = self.deep_merge(config, local_config)
        elif local_config:
            self.logger.error(
                f"Ignoring local configuration {local_config_path}: not a mapping of sections"
            )
        else:
            self.logger.warning(
                f"Local configuration file is empty: {local_config_path}"
            )

        return config

    def _get_local_config_path(self, base_config_path: Path) -> Path:
        """Return the override path: primekit.yaml -> primekit.local.yaml."""
        return base_config_path.parent / f"{base_config_path.stem}.local.yaml"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge override dictionary into base dictionary.

        Nested dictionaries are merged recursively; any other override value
        replaces the base value.

        Example:
            base = {'factorization': {'max_restarts': 64, 'trial_division_limit': 10000}}
            override = {'factorization': {'max_restarts': 8}}
            result = {'factorization': {'max_restarts': 8, 'trial_division_limit': 10000}}

        Returns:
            Merged configuration dictionary (new dict, inputs unchanged)
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.deep_merge(result[key], value)
            else:
                result[key] = value

        return result

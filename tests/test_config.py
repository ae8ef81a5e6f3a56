"""
Unit tests for configuration loading.

Tests cover:
- Base file loading and .local.yaml deep merge
- Typed config defaults and validation
"""
import pytest

from primekit.config_manager import ConfigManager
from primekit.errors import InvalidArgument
from primekit.factorization import DEFAULT_MAX_ITERATIONS, DEFAULT_MAX_RESTARTS
from primekit.typed_config import AppConfig, FactorizationConfig, TypedConfigLoader


BASE_YAML = """
primality:
  rounds: 12
factorization:
  max_restarts: 16
  max_iterations: 500000
  trial_division_limit: 2000
execution:
  workers: 2
logging:
  file: logs/test.log
  level: DEBUG
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "primekit.yaml"
    path.write_text(BASE_YAML, encoding="utf-8")
    return path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load_config(str(tmp_path / "nope.yaml"))

    def test_loads_base_config(self, config_file):
        config = ConfigManager().load_config(str(config_file))
        assert config['primality']['rounds'] == 12
        assert config['execution']['workers'] == 2

    def test_empty_file_gives_empty_dict(self, tmp_path):
        path = tmp_path / "primekit.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigManager().load_config(str(path)) == {}

    def test_local_override_is_deep_merged(self, config_file, tmp_path):
        (tmp_path / "primekit.local.yaml").write_text(
            "factorization:\n  max_restarts: 4\nexecution:\n  workers: 8\n",
            encoding="utf-8",
        )
        config = ConfigManager().load_config(str(config_file))
        assert config['factorization']['max_restarts'] == 4
        assert config['factorization']['max_iterations'] == 500000
        assert config['execution']['workers'] == 8
        assert config['primality']['rounds'] == 12

    def test_broken_local_override_is_ignored(self, config_file, tmp_path):
        (tmp_path / "primekit.local.yaml").write_text("factorization: [unclosed\n", encoding="utf-8")
        config = ConfigManager().load_config(str(config_file))
        assert config['factorization']['max_restarts'] == 16

    def test_top_level_list_raises(self, tmp_path):
        path = tmp_path / "primekit.yaml"
        path.write_text("- primality\n- execution\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping of sections"):
            ConfigManager().load_config(str(path))

    def test_non_mapping_local_override_is_ignored(self, config_file, tmp_path):
        (tmp_path / "primekit.local.yaml").write_text("- workers\n", encoding="utf-8")
        config = ConfigManager().load_config(str(config_file))
        assert config['execution']['workers'] == 2

    def test_deep_merge_does_not_mutate_inputs(self):
        base = {'a': {'b': 1, 'c': 2}, 'd': 3}
        override = {'a': {'b': 99}, 'e': 4}
        result = ConfigManager().deep_merge(base, override)
        assert result == {'a': {'b': 99, 'c': 2}, 'd': 3, 'e': 4}
        assert base == {'a': {'b': 1, 'c': 2}, 'd': 3}


class TestTypedConfig:
    """Tests for TypedConfigLoader and the config dataclasses."""

    def test_load_typed(self, config_file):
        config = TypedConfigLoader().load(str(config_file))
        assert config.primality.rounds == 12
        assert config.factorization.max_restarts == 16
        assert config.factorization.max_iterations == 500000
        assert config.factorization.trial_division_limit == 2000
        assert config.execution.workers == 2
        assert config.logging.file == "logs/test.log"
        assert config.logging.level == "DEBUG"

    def test_defaults_for_missing_sections(self):
        config = TypedConfigLoader().parse({})
        assert config == AppConfig()
        assert config.primality.rounds == 10
        assert config.factorization.max_restarts == DEFAULT_MAX_RESTARTS
        assert config.factorization.max_iterations == DEFAULT_MAX_ITERATIONS

    def test_null_budget_means_unbounded(self):
        config = TypedConfigLoader().parse(
            {'factorization': {'max_restarts': None, 'max_iterations': None}}
        )
        assert config.factorization.max_restarts is None
        assert config.factorization.max_iterations is None
        assert config.factorization.as_kwargs() == {
            'max_restarts': None,
            'max_iterations': None,
            'trial_limit': config.factorization.trial_division_limit,
        }

    @pytest.mark.parametrize("raw", [
        {'primality': {'rounds': 0}},
        {'factorization': {'max_restarts': -1}},
        {'factorization': {'max_iterations': 0}},
        {'factorization': {'trial_division_limit': -5}},
        {'execution': {'workers': 0}},
    ])
    def test_invalid_values_rejected(self, raw):
        with pytest.raises(InvalidArgument):
            TypedConfigLoader().parse(raw)

    @pytest.mark.parametrize("raw", [
        {'primality': {'rounds': 'ten'}},
        {'primality': {'rounds': True}},
        {'factorization': {'max_restarts': 2.5}},
        {'factorization': {'max_iterations': '1e6'}},
        {'factorization': {'trial_division_limit': None}},
        {'execution': {'workers': [2]}},
        {'logging': {'level': 10}},
        {'logging': {'file': 42}},
    ])
    def test_wrong_value_types_rejected(self, raw):
        with pytest.raises(InvalidArgument):
            TypedConfigLoader().parse(raw)

    @pytest.mark.parametrize("raw", [
        {'primality': 5},
        {'execution': ['workers', 2]},
        {'logging': 'DEBUG'},
    ])
    def test_non_mapping_section_rejected(self, raw):
        with pytest.raises(InvalidArgument, match="section must be a mapping"):
            TypedConfigLoader().parse(raw)

    def test_non_mapping_top_level_rejected(self):
        with pytest.raises(InvalidArgument, match="mapping of sections"):
            TypedConfigLoader().parse(['primality', 'execution'])

    def test_null_log_file_allowed(self):
        config = TypedConfigLoader().parse({'logging': {'file': None}})
        assert config.logging.file is None

    def test_factorization_kwargs(self):
        fc = FactorizationConfig(max_restarts=3, max_iterations=100, trial_division_limit=50)
        assert fc.as_kwargs() == {'max_restarts': 3, 'max_iterations': 100, 'trial_limit': 50}

"""
Tests for agent configuration.

Tests cover:
- Defaults and validation
- Loading from dictionaries and JSON files
- Loading from ARENABOT_* environment variables and .env files
"""

import json
import os
import pytest

from arenabot.config import ENV_PREFIX, AgentConfig
from arenabot.scoring import ScoringStrategy


@pytest.fixture
def clean_env():
    """Remove ARENABOT_* variables before and after the test (load_dotenv writes os.environ)."""
    def purge():
        for key in [k for k in os.environ if k.startswith(ENV_PREFIX)]:
            del os.environ[key]

    purge()
    yield
    purge()


@pytest.fixture
def empty_dotenv(tmp_path):
    path = tmp_path / ".env"
    path.write_text("")
    return str(path)


class TestDefaults:
    """Tests for default settings and validation."""

    def test_defaults(self):
        config = AgentConfig()
        assert config.wall_perimeter == 100.0
        assert config.scoring_strategy == ScoringStrategy.INVERSE_SUM
        assert config.velocity_window == 20
        assert config.default_velocity == 20.0
        assert config.fire_thresholds is None

    def test_strategy_from_string(self):
        config = AgentConfig(scoring_strategy="exponential_decay")
        assert config.scoring_strategy == ScoringStrategy.EXPONENTIAL_DECAY

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown scoring strategy"):
            AgentConfig(scoring_strategy="psychic")

    @pytest.mark.parametrize("field,value", [
        ("wall_perimeter", 0.0),
        ("velocity_window", 0),
        ("step_distance", -1.0),
        ("heading_precision", -0.5),
        ("ram_fire_power", 5.0),
        ("ram_fire_power", 0.0),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            AgentConfig(**{field: value})

    def test_thresholds_normalized_to_tuples(self):
        config = AgentConfig(fire_thresholds=[[10, 2], [1, 0.5]])
        assert config.fire_thresholds == [(10.0, 2.0), (1.0, 0.5)]


class TestFromDict:
    """Tests for dictionary and JSON loading."""

    def test_partial_dict_keeps_defaults(self):
        config = AgentConfig.from_dict({"wall_perimeter": 150})
        assert config.wall_perimeter == 150
        assert config.velocity_window == 20

    def test_round_trip(self):
        config = AgentConfig(
            wall_perimeter=80.0,
            scoring_strategy=ScoringStrategy.EXPONENTIAL_DECAY,
            fire_thresholds=[(30.0, 3.0)],
            verbose=True,
        )
        assert AgentConfig.from_dict(config.to_dict()) == config

    def test_from_json(self, tmp_path):
        path = tmp_path / "agent.json"
        path.write_text(json.dumps({"scoring_strategy": "exponential_decay", "velocity_window": 5}))
        config = AgentConfig.from_json(str(path))
        assert config.scoring_strategy == ScoringStrategy.EXPONENTIAL_DECAY
        assert config.velocity_window == 5

    def test_from_json_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AgentConfig.from_json(str(tmp_path / "missing.json"))


class TestFromEnv:
    """Tests for environment loading."""

    def test_no_variables_gives_defaults(self, clean_env, empty_dotenv):
        assert AgentConfig.from_env(empty_dotenv) == AgentConfig()

    def test_environment_variables(self, clean_env, empty_dotenv):
        os.environ["ARENABOT_WALL_PERIMETER"] = "60"
        os.environ["ARENABOT_VELOCITY_WINDOW"] = "10"
        os.environ["ARENABOT_VERBOSE"] = "false"
        config = AgentConfig.from_env(empty_dotenv)
        assert config.wall_perimeter == 60.0
        assert config.velocity_window == 10
        assert config.verbose is False

    def test_dotenv_file(self, clean_env, tmp_path):
        dotenv = tmp_path / ".env"
        dotenv.write_text("ARENABOT_SCORING_STRATEGY=exponential_decay\nARENABOT_WALL_PERIMETER=75\n")
        config = AgentConfig.from_env(str(dotenv))
        assert config.scoring_strategy == ScoringStrategy.EXPONENTIAL_DECAY
        assert config.wall_perimeter == 75.0

    def test_environment_overrides_dotenv(self, clean_env, tmp_path):
        dotenv = tmp_path / ".env"
        dotenv.write_text("ARENABOT_WALL_PERIMETER=75\n")
        os.environ["ARENABOT_WALL_PERIMETER"] = "120"
        assert AgentConfig.from_env(str(dotenv)).wall_perimeter == 120.0

    def test_base_config_file(self, clean_env, empty_dotenv, tmp_path):
        base = tmp_path / "agent.json"
        base.write_text(json.dumps({"wall_perimeter": 90, "velocity_window": 7}))
        os.environ["ARENABOT_CONFIG"] = str(base)
        os.environ["ARENABOT_VELOCITY_WINDOW"] = "3"
        config = AgentConfig.from_env(empty_dotenv)
        assert config.wall_perimeter == 90
        assert config.velocity_window == 3

    def test_verbose_announces_config(self, clean_env, empty_dotenv, capsys):
        os.environ["ARENABOT_VERBOSE"] = "1"
        AgentConfig.from_env(empty_dotenv)
        assert "[CONFIG]" in capsys.readouterr().out

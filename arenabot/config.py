"""
Agent configuration.

Settings can come from three places:
- Plain dictionaries (from_dict)
- JSON files (from_json)
- ARENABOT_* environment variables, with a .env file honoured (from_env)
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from .avoidance import DEFAULT_ARRIVAL_MARGIN, DEFAULT_HEADING_PRECISION, DEFAULT_STEP_DISTANCE
from .commands import MAX_FIRE_POWER, MIN_FIRE_POWER
from .scoring import ScoringStrategy
from .tracking import DEFAULT_VELOCITY, DEFAULT_WINDOW


ENV_PREFIX = "ARENABOT_"


@dataclass
class AgentConfig:
    """Tunable settings for one agent core."""
    wall_perimeter: float = 100.0
    scoring_strategy: ScoringStrategy = ScoringStrategy.INVERSE_SUM
    velocity_window: int = DEFAULT_WINDOW
    default_velocity: float = DEFAULT_VELOCITY
    # None means the scorer's own table
    fire_thresholds: Optional[List[Tuple[float, float]]] = None
    step_distance: float = DEFAULT_STEP_DISTANCE
    arrival_margin: float = DEFAULT_ARRIVAL_MARGIN
    heading_precision: float = DEFAULT_HEADING_PRECISION
    ram_fire_power: float = MAX_FIRE_POWER
    teammate_evade_turn: float = 90.0
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate and coerce settings."""
        if isinstance(self.scoring_strategy, str):
            try:
                self.scoring_strategy = ScoringStrategy(self.scoring_strategy)
            except ValueError:
                valid = ", ".join(s.value for s in ScoringStrategy)
                raise ValueError(
                    f"Unknown scoring strategy '{self.scoring_strategy}' (expected one of: {valid})"
                ) from None
        if self.wall_perimeter <= 0:
            raise ValueError("Wall perimeter must be positive")
        if self.velocity_window < 1:
            raise ValueError("Velocity window must be at least 1")
        if self.step_distance <= 0:
            raise ValueError("Step distance must be positive")
        if self.heading_precision < 0:
            raise ValueError("Heading precision cannot be negative")
        if not MIN_FIRE_POWER <= self.ram_fire_power <= MAX_FIRE_POWER:
            raise ValueError(
                f"Ram fire power must be between {MIN_FIRE_POWER} and {MAX_FIRE_POWER}"
            )
        if self.fire_thresholds is not None:
            self.fire_thresholds = [(float(score), float(power)) for score, power in self.fire_thresholds]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AgentConfig':
        """Create configuration from a dictionary. Missing keys keep their defaults."""
        defaults = cls()
        return cls(
            wall_perimeter=data.get("wall_perimeter", defaults.wall_perimeter),
            scoring_strategy=data.get("scoring_strategy", defaults.scoring_strategy),
            velocity_window=data.get("velocity_window", defaults.velocity_window),
            default_velocity=data.get("default_velocity", defaults.default_velocity),
            fire_thresholds=data.get("fire_thresholds", defaults.fire_thresholds),
            step_distance=data.get("step_distance", defaults.step_distance),
            arrival_margin=data.get("arrival_margin", defaults.arrival_margin),
            heading_precision=data.get("heading_precision", defaults.heading_precision),
            ram_fire_power=data.get("ram_fire_power", defaults.ram_fire_power),
            teammate_evade_turn=data.get("teammate_evade_turn", defaults.teammate_evade_turn),
            verbose=data.get("verbose", defaults.verbose),
        )

    @classmethod
    def from_json(cls, path: str) -> 'AgentConfig':
        """Load configuration from a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Agent config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'AgentConfig':
        """
        Load configuration from ARENABOT_* environment variables.

        A .env file is loaded first (without overriding variables already
        set). ARENABOT_CONFIG may name a JSON file used as the base, which
        individual variables then override.

        Args:
            dotenv_path: Explicit .env file; python-dotenv searches when None.

        Returns:
            Configured AgentConfig.
        """
        load_dotenv(dotenv_path)

        base_path = os.getenv(f"{ENV_PREFIX}CONFIG")
        data: Dict[str, Any] = {}
        if base_path:
            with open(_existing(base_path)) as f:
                data = json.load(f)

        converters = {
            "wall_perimeter": float,
            "scoring_strategy": str,
            "velocity_window": int,
            "default_velocity": float,
            "step_distance": float,
            "arrival_margin": float,
            "heading_precision": float,
            "ram_fire_power": float,
            "teammate_evade_turn": float,
            "verbose": _parse_bool,
        }
        for key, convert in converters.items():
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw is not None:
                data[key] = convert(raw)

        config = cls.from_dict(data)
        if config.verbose:
            print(f"[CONFIG] Loaded agent config: strategy={config.scoring_strategy.value}, "
                  f"perimeter={config.wall_perimeter}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "wall_perimeter": self.wall_perimeter,
            "scoring_strategy": self.scoring_strategy.value,
            "velocity_window": self.velocity_window,
            "default_velocity": self.default_velocity,
            "fire_thresholds": (
                [list(t) for t in self.fire_thresholds] if self.fire_thresholds is not None else None
            ),
            "step_distance": self.step_distance,
            "arrival_margin": self.arrival_margin,
            "heading_precision": self.heading_precision,
            "ram_fire_power": self.ram_fire_power,
            "teammate_evade_turn": self.teammate_evade_turn,
            "verbose": self.verbose,
        }


def _existing(path: str) -> Path:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Agent config not found: {path}")
    return config_path


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")

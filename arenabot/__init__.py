"""arenabot navigation and targeting core for arena combat agents."""

from .state import (
    Position,
    ArenaBounds,
    SelfState,
    TargetObservation,
)

from .geometry import (
    BEARING_UNDEFINED,
    distance,
    distance_from_origin,
    is_coincident,
    bearing_absolute,
    bearing_relative_normalized,
    relative_angle,
    normalize_heading,
    gun_offset,
    gun_bearing_to,
)

from .walls import (
    Wall,
    WallMargins,
    probe_distance,
    distance_to_wall,
    distance_left_beam,
    distance_right_beam,
    closest_wall,
    closest_wall_is_on_left_side,
)

from .commands import (
    TurnLeft,
    TurnRight,
    SetHeading,
    MoveAhead,
    TurnGunRight,
    Fire,
    Command,
    CommandSink,
    CommandBuffer,
)

from .avoidance import (
    turn_for_wall,
    align_heading,
    steer_towards,
    align_gun_to_center,
)

from .tracking import (
    DEFAULT_VELOCITY,
    VelocityTracker,
)

from .scoring import (
    ScoringStrategy,
    TargetScorer,
    InverseSumScorer,
    ExponentialDecayScorer,
    FiringDecision,
    create_scorer,
    decide_fire,
    fire_power_for_score,
    power_for_bullet_speed,
    movement_compensation,
)

from .stats import BulletStats
from .config import AgentConfig
from .core import TacticalCore

__all__ = [
    # State
    "Position",
    "ArenaBounds",
    "SelfState",
    "TargetObservation",
    # Geometry
    "BEARING_UNDEFINED",
    "distance",
    "distance_from_origin",
    "is_coincident",
    "bearing_absolute",
    "bearing_relative_normalized",
    "relative_angle",
    "normalize_heading",
    "gun_offset",
    "gun_bearing_to",
    # Walls
    "Wall",
    "WallMargins",
    "probe_distance",
    "distance_to_wall",
    "distance_left_beam",
    "distance_right_beam",
    "closest_wall",
    "closest_wall_is_on_left_side",
    # Commands
    "TurnLeft",
    "TurnRight",
    "SetHeading",
    "MoveAhead",
    "TurnGunRight",
    "Fire",
    "Command",
    "CommandSink",
    "CommandBuffer",
    # Avoidance and steering
    "turn_for_wall",
    "align_heading",
    "steer_towards",
    "align_gun_to_center",
    # Tracking
    "DEFAULT_VELOCITY",
    "VelocityTracker",
    # Scoring
    "ScoringStrategy",
    "TargetScorer",
    "InverseSumScorer",
    "ExponentialDecayScorer",
    "FiringDecision",
    "create_scorer",
    "decide_fire",
    "fire_power_for_score",
    "power_for_bullet_speed",
    "movement_compensation",
    # Stats, config, core
    "BulletStats",
    "AgentConfig",
    "TacticalCore",
]

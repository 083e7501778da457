"""
Per-tick state supplied by the host environment.

This module holds the plain data carried through every computation:
- Positions and arena bounds
- The agent's own state (position, body heading, gun heading)
- Observations of other agents as reported by the scanner

None of these objects are persisted by the core. The host builds them fresh
every tick and they are discarded once the tick's decisions are made.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_BODY_HEIGHT = 36.0  # Engine default robot size


# =============================================================================
# POSITIONS AND BOUNDS
# =============================================================================

@dataclass(frozen=True)
class Position:
    """A point in arena coordinates. Origin is the bottom-left corner."""
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class ArenaBounds:
    """
    Size of the rectangular arena, constant for a round.

    Attributes:
        width: Extent along the x axis.
        height: Extent along the y axis.
    """
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate arena dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Arena width and height must be positive")

    def center(self) -> Position:
        """Centre of the arena, rounded to whole units."""
        return Position(float(round(self.width / 2)), float(round(self.height / 2.0)))

    def contains(self, position: Position) -> bool:
        """Check whether a position lies inside the arena."""
        return 0.0 <= position.x <= self.width and 0.0 <= position.y <= self.height


# =============================================================================
# SELF STATE
# =============================================================================

@dataclass
class SelfState:
    """
    The agent's own state for the current tick.

    Attributes:
        x: Own x coordinate.
        y: Own y coordinate.
        heading: Body heading in degrees, clockwise from north.
        gun_heading: Gun heading in degrees, clockwise from north.
        arena: Arena bounds for the round.
        body_height: Size of the agent's body, used for arrival checks.
    """
    x: float
    y: float
    heading: float
    gun_heading: float
    arena: ArenaBounds
    body_height: float = DEFAULT_BODY_HEIGHT

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SelfState:
        """
        Create self state from a dictionary.

        Accepts either nested ``arena`` ({"width", "height"}) or flat
        ``arena_width``/``arena_height`` keys.
        """
        arena_data = data.get("arena", {})
        arena = ArenaBounds(
            width=arena_data.get("width", data.get("arena_width", 800.0)),
            height=arena_data.get("height", data.get("arena_height", 600.0)),
        )
        return cls(
            x=data["x"],
            y=data["y"],
            heading=data.get("heading", 0.0),
            gun_heading=data.get("gun_heading", data.get("heading", 0.0)),
            arena=arena,
            body_height=data.get("body_height", DEFAULT_BODY_HEIGHT),
        )


# =============================================================================
# TARGET OBSERVATION
# =============================================================================

@dataclass
class TargetObservation:
    """
    Scanner snapshot of another agent.

    Attributes:
        name: Unique identifier, stable until the agent is eliminated.
        bearing: Bearing to the target in degrees, relative to own heading.
        distance: Distance from self.
        heading: Target's heading in degrees.
        velocity: Signed speed along the target's own heading.
        is_teammate: True when the observed agent is on our team.
    """
    name: str
    bearing: float
    distance: float
    heading: float
    velocity: float
    is_teammate: bool = False

    @property
    def speed(self) -> float:
        return abs(self.velocity)

    def absolute_bearing(self, state: SelfState) -> float:
        """Bearing to the target in degrees, clockwise from north."""
        return (state.heading + self.bearing) % 360.0

    def absolute_position(self, state: SelfState) -> Position:
        """
        Derive the target's arena position from bearing and distance.

        Args:
            state: Own state at the time of the scan.

        Returns:
            Target position in arena coordinates.
        """
        angle = math.radians(state.heading + self.bearing)
        return Position(
            state.x + self.distance * math.sin(angle),
            state.y + self.distance * math.cos(angle),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for relaying to teammates."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TargetObservation:
        """Create an observation from a relayed dictionary."""
        return cls(
            name=data["name"],
            bearing=data.get("bearing", 0.0),
            distance=data.get("distance", 0.0),
            heading=data.get("heading", 0.0),
            velocity=data.get("velocity", 0.0),
            is_teammate=data.get("is_teammate", False),
        )

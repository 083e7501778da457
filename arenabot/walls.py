"""
Wall proximity analysis.

Measures how far the agent is from the arena boundary:
- Straight-line distance to the wall along a probe heading
- The same probe turned 90 degrees left and right ("beams")
- Which of the four walls is nearest

The probe distance is derived from a right triangle: the governing margin is
the smaller of the two wall margins adjacent to the probe's quadrant, and the
probe heading is folded into [0, 45] degrees to give the incidence angle.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

from .geometry import normalize_heading
from .state import SelfState


# =============================================================================
# ENUMS
# =============================================================================

class Wall(Enum):
    """The four boundary segments of the arena."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


# =============================================================================
# MARGINS
# =============================================================================

@dataclass(frozen=True)
class WallMargins:
    """
    Perpendicular distances from a position to each wall.

    All margins are non-negative while the position is inside the arena.
    """
    right: float
    left: float
    up: float
    down: float

    @classmethod
    def from_state(cls, state: SelfState) -> WallMargins:
        return cls(
            right=state.arena.width - state.x,
            left=state.x,
            up=state.arena.height - state.y,
            down=state.y,
        )

    def governing_margin(self, probe_heading: float) -> float:
        """
        Smaller of the two margins adjacent to the probe heading's quadrant.

        Quadrants are right-closed: (0, 90], (90, 180], (180, 270], and
        everything else (including 0) counts as the up-left quadrant.
        """
        if 0 < probe_heading <= 90:
            return min(self.right, self.up)
        if 90 < probe_heading <= 180:
            return min(self.right, self.down)
        if 180 < probe_heading <= 270:
            return min(self.down, self.left)
        return min(self.left, self.up)


# =============================================================================
# PROBES
# =============================================================================

def fold_angle(theta: float) -> float:
    """
    Fold a heading into [0, 45] degrees.

    Subtracts 90 while the angle exceeds 45, then takes the absolute value.
    Exactly 45 is left untouched.
    """
    while theta > 45:
        theta -= 90
    return abs(theta)


def probe_distance(state: SelfState, probe_heading: float) -> float:
    """
    Distance to the arena boundary along a probe heading.

    Args:
        state: Own state (position and arena bounds are used).
        probe_heading: Direction to probe in degrees; wrapped into [0, 360).

    Returns:
        Length of the hypotenuse c = sqrt(a^2 + b^2) where a is the governing
        margin and b = a * tan(folded angle).
    """
    theta = normalize_heading(probe_heading)
    a = WallMargins.from_state(state).governing_margin(theta)
    b = a * math.tan(math.radians(fold_angle(theta)))
    return math.sqrt(a ** 2 + b ** 2)


def distance_to_wall(state: SelfState) -> float:
    """Distance to the wall along the current body heading."""
    return probe_distance(state, state.heading)


def distance_left_beam(state: SelfState) -> float:
    """Distance to the wall along a probe 90 degrees left of the heading."""
    return probe_distance(state, state.heading - 90)


def distance_right_beam(state: SelfState) -> float:
    """Distance to the wall along a probe 90 degrees right of the heading."""
    return probe_distance(state, state.heading + 90)


# =============================================================================
# NEAREST WALL
# =============================================================================

# Tie-break order when several margins are equal
_CLOSEST_WALL_ORDER = (Wall.LEFT, Wall.RIGHT, Wall.UP, Wall.DOWN)


def closest_wall(state: SelfState) -> Wall:
    """
    Wall with the smallest perpendicular margin.

    Ties go to the first of LEFT, RIGHT, UP, DOWN. An agent at the exact
    centre of a square arena therefore reports LEFT.
    """
    margins = WallMargins.from_state(state)
    by_wall = {
        Wall.LEFT: margins.left,
        Wall.RIGHT: margins.right,
        Wall.UP: margins.up,
        Wall.DOWN: margins.down,
    }
    nearest = min(by_wall.values())
    return next(wall for wall in _CLOSEST_WALL_ORDER if by_wall[wall] == nearest)


# Heading bands for closest_wall_is_on_left_side. They overlap on purpose;
# the first band containing the heading decides.
_LEFT_SIDE_BANDS: List[Tuple[float, float, Callable[[SelfState], bool]]] = [
    (0.0, 110.0, lambda s: s.x > s.arena.width - s.x),
    (70.0, 180.0, lambda s: s.y > s.arena.height - s.y),
    (180.0, 290.0, lambda s: s.x < s.arena.width - s.x),
    (250.0, 360.0, lambda s: s.y < s.arena.height - s.y),
]


def closest_wall_is_on_left_side(state: SelfState) -> bool:
    """
    Heuristic check whether the nearest wall is on the agent's left.

    Headings outside [0, 360) match no band and return False.
    """
    for low, high, predicate in _LEFT_SIDE_BANDS:
        if low <= state.heading < high:
            return predicate(state)
    return False

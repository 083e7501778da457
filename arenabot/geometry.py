"""
Arena geometry for the arenabot navigation core.

Pure functions over positions and headings:
- Euclidean distances
- Absolute and relative bearings between two points
- Angle normalization
- Gun-relative angles

Headings are in degrees, clockwise from north (+y). The bearing functions keep
the quadrant selection of the robot they were written for, including its
asymmetric fourth quadrant and its half-turn clamp. Both are pinned by tests.
"""

from __future__ import annotations

import math

from .state import Position, SelfState, TargetObservation


# =============================================================================
# CONSTANTS
# =============================================================================

# Returned by the bearing functions when both points coincide
BEARING_UNDEFINED = 0.0

ORIGIN = Position(0.0, 0.0)


# =============================================================================
# DISTANCES
# =============================================================================

def distance(p: Position, q: Position) -> float:
    """
    Euclidean distance between two points.

    Args:
        p: First point.
        q: Second point.

    Returns:
        Distance, never negative. Zero only when the points coincide.
    """
    delta_x = p.x - q.x
    delta_y = p.y - q.y
    return math.sqrt(delta_x ** 2 + delta_y ** 2)


def distance_from_origin(p: Position) -> float:
    """Distance of a point from the arena origin (0, 0)."""
    return distance(ORIGIN, p)


def is_coincident(p: Position, q: Position) -> bool:
    """True when both points are the same, so no bearing exists between them."""
    return p.x == q.x and p.y == q.y


# =============================================================================
# BEARINGS
# =============================================================================

def bearing_absolute(origin: Position, target: Position) -> float:
    """
    Bearing from origin to target in degrees.

    The raw arcsine of dx/hypotenuse is moved into a quadrant by the signs of
    the deltas:
    - dx > 0, dy > 0: arcsine as is
    - dx < 0, dy > 0: 360 + arcsine
    - dx < 0, dy < 0: 180 - arcsine
    - dx > 0, dy < 0: arcsine as is (negative, NOT 180 - arcsine)

    Targets exactly on an axis through the origin match no quadrant and
    yield 0.0.

    Args:
        origin: Point the bearing is measured from.
        target: Point the bearing points at.

    Returns:
        Bearing in degrees, or BEARING_UNDEFINED for coincident points.
    """
    if is_coincident(origin, target):
        return BEARING_UNDEFINED

    delta_x = target.x - origin.x
    delta_y = target.y - origin.y
    hypotenuse = distance(origin, target)
    arc_sin = math.degrees(math.asin(delta_x / hypotenuse))

    if delta_x > 0 and delta_y > 0:
        return arc_sin
    if delta_x < 0 and delta_y > 0:
        return 360 + arc_sin
    if delta_x < 0 and delta_y < 0:
        return 180 - arc_sin
    if delta_x > 0 and delta_y < 0:
        return arc_sin
    return 0.0


def bearing_relative_normalized(origin: Position, target: Position) -> float:
    """
    Bearing from origin to target, folded by a half turn.

    Values above 180 lose 180 and values below -180 gain 180. This is not a
    standard normalization (see relative_angle) and is kept as is.
    """
    bearing = bearing_absolute(origin, target)
    if bearing > 180:
        bearing -= 180
    if bearing < -180:
        bearing += 180
    return bearing


# =============================================================================
# ANGLES
# =============================================================================

def relative_angle(angle: float) -> float:
    """
    Normalize an angle into (-180, 180].

    Args:
        angle: Any angle in degrees.

    Returns:
        The equivalent angle in (-180, 180].
    """
    angle = math.fmod(angle, 360.0)
    while angle > 180:
        angle -= 360
    while angle <= -180:
        angle += 360
    return angle


def normalize_heading(angle: float) -> float:
    """Wrap an angle into [0, 360)."""
    heading = angle % 360.0
    # -1e-15 % 360 rounds to 360.0
    if heading >= 360.0:
        heading -= 360.0
    return heading


def gun_offset(state: SelfState) -> float:
    """Angle between body heading and gun heading (positive when the gun is left of the body)."""
    return state.heading - state.gun_heading


def gun_bearing_to(state: SelfState, observation: TargetObservation) -> float:
    """
    Gun turn needed to point at an observed target.

    Args:
        state: Own state.
        observation: Scanned target (bearing relative to body heading).

    Returns:
        Degrees to turn the gun right (unnormalized).
    """
    return state.heading + observation.bearing - state.gun_heading

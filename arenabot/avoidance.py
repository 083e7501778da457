"""
Perimeter avoidance and steering steps.

Every function here is a one-shot decision: it looks at the current state,
issues at most a couple of commands to the sink, and reports whether it had
to act. Nothing is remembered between calls, so the host's tick loop is
what turns these steps into continuous motion.
"""

from __future__ import annotations

from .commands import CommandSink, MoveAhead, SetHeading, TurnGunRight, TurnLeft, TurnRight
from .geometry import bearing_absolute, distance, gun_offset, is_coincident, relative_angle
from .state import Position, SelfState
from .walls import distance_left_beam, distance_right_beam, distance_to_wall


# =============================================================================
# CONSTANTS
# =============================================================================

# Turn magnitude is AVOIDANCE_TURN_FACTOR / wall distance
AVOIDANCE_TURN_FACTOR = 800.0
AVOIDANCE_MAX_TURN_DEG = 180.0

DEFAULT_HEADING_PRECISION = 1.0
DEFAULT_STEP_DISTANCE = 10.0
DEFAULT_ARRIVAL_MARGIN = 5.0


# =============================================================================
# WALL AVOIDANCE
# =============================================================================

def avoidance_turn(wall_distance: float) -> float:
    """
    Turn magnitude in degrees for a given distance to the wall.

    Args:
        wall_distance: Distance to the wall along the heading.

    Returns:
        800 / distance, or AVOIDANCE_MAX_TURN_DEG when touching the wall.
    """
    if wall_distance <= 0:
        return AVOIDANCE_MAX_TURN_DEG
    return AVOIDANCE_TURN_FACTOR / wall_distance


def turn_for_wall(state: SelfState, perimeter: float, sink: CommandSink) -> bool:
    """
    Turn away from a wall the agent is approaching.

    When the wall ahead is closer than the perimeter, exactly one turn is
    issued towards the side with more clearance: right if the left beam is
    shorter, otherwise left.

    Args:
        state: Own state for this tick.
        perimeter: Distance at which avoidance starts.
        sink: Receives the turn command.

    Returns:
        True if a turn was issued, False if the way ahead is clear.
    """
    wall_distance = distance_to_wall(state)
    if wall_distance >= perimeter:
        return False

    turn = avoidance_turn(wall_distance)
    if distance_left_beam(state) < distance_right_beam(state):
        sink.issue(TurnRight(turn))
    else:
        sink.issue(TurnLeft(turn))
    return True


# =============================================================================
# STEERING
# =============================================================================

def align_heading(
    state: SelfState,
    heading: float,
    sink: CommandSink,
    precision: float = DEFAULT_HEADING_PRECISION
) -> bool:
    """
    Step the body heading towards an absolute heading.

    Args:
        state: Own state for this tick.
        heading: Desired absolute heading in degrees.
        sink: Receives the turn command.
        precision: Allowed deviation in degrees.

    Returns:
        True once the heading is within +/- precision, else False after
        issuing a turn.
    """
    offset = relative_angle(state.heading - heading)
    if abs(offset) <= precision:
        return True
    sink.issue(TurnLeft(offset))
    return False


def steer_towards(
    state: SelfState,
    x: float,
    y: float,
    sink: CommandSink,
    step: float = DEFAULT_STEP_DISTANCE,
    margin: float = DEFAULT_ARRIVAL_MARGIN
) -> bool:
    """
    Take one step towards a destination.

    Args:
        state: Own state for this tick.
        x: Destination x coordinate.
        y: Destination y coordinate.
        sink: Receives the heading and move commands.
        step: Distance to move this tick.
        margin: Extra slack added to half the body height.

    Returns:
        True when the destination is reached, else False.
    """
    destination = Position(x, y)
    if is_coincident(state.position, destination):
        return True
    if distance(state.position, destination) <= state.body_height / 2 + margin:
        return True

    sink.issue(SetHeading(bearing_absolute(state.position, destination)))
    sink.issue(MoveAhead(step))
    return False


def align_gun_to_center(state: SelfState, sink: CommandSink) -> None:
    """Point the gun along the body heading."""
    sink.issue(TurnGunRight(gun_offset(state)))

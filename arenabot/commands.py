"""
Movement and aim commands emitted back to the host.

Commands are effect requests: the core never mutates its own state in
response to them. The host executes them and reports the resulting state on
the next tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Union, runtime_checkable


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_FIRE_POWER = 0.1
MAX_FIRE_POWER = 3.0


# =============================================================================
# COMMAND TYPES
# =============================================================================

@dataclass(frozen=True)
class TurnLeft:
    """Turn the body left by the given number of degrees."""
    degrees: float


@dataclass(frozen=True)
class TurnRight:
    """Turn the body right by the given number of degrees."""
    degrees: float


@dataclass(frozen=True)
class SetHeading:
    """Steer the body towards an absolute heading."""
    heading: float


@dataclass(frozen=True)
class MoveAhead:
    """Move forward by the given distance."""
    distance: float


@dataclass(frozen=True)
class TurnGunRight:
    """Turn the gun right by the given number of degrees."""
    degrees: float


@dataclass(frozen=True)
class Fire:
    """
    Fire a bullet.

    Attributes:
        power: Bullet power, between MIN_FIRE_POWER and MAX_FIRE_POWER.
    """
    power: float

    def __post_init__(self) -> None:
        """Validate fire power."""
        if not MIN_FIRE_POWER <= self.power <= MAX_FIRE_POWER:
            raise ValueError(
                f"Fire power must be between {MIN_FIRE_POWER} and {MAX_FIRE_POWER}, "
                f"got {self.power}"
            )


Command = Union[TurnLeft, TurnRight, SetHeading, MoveAhead, TurnGunRight, Fire]


# =============================================================================
# COMMAND SINK
# =============================================================================

@runtime_checkable
class CommandSink(Protocol):
    """
    Anything that accepts commands for the host to execute.

    Hosts implement this to forward commands to the game engine.
    """

    def issue(self, command: Command) -> None:
        """
        Queue a command for execution.

        Args:
            command: The command to execute.
        """
        ...


class CommandBuffer:
    """In-process sink that keeps issued commands in order until drained."""

    def __init__(self) -> None:
        self._commands: List[Command] = []

    def issue(self, command: Command) -> None:
        self._commands.append(command)

    @property
    def commands(self) -> List[Command]:
        """Commands issued since the last drain (copy)."""
        return list(self._commands)

    def drain(self) -> List[Command]:
        """Return and clear all pending commands."""
        commands, self._commands = self._commands, []
        return commands

    def __len__(self) -> int:
        return len(self._commands)

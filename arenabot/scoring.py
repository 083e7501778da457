"""
Targeting heuristics for the arenabot core.

This module implements:
- Target scoring strategies (a relative ranking signal, not a probability)
- Fire power selection from a score
- Lead compensation for moving targets
- Firing decisions handed back to the host

Two scoring formulas exist for the same job. Both sit behind TargetScorer and
are chosen by ScoringStrategy so they can be compared against each other.
Both rank a closer, better aligned, slower target higher.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .commands import MAX_FIRE_POWER, MIN_FIRE_POWER, Command, Fire, TurnGunRight
from .geometry import gun_bearing_to, relative_angle
from .state import SelfState, TargetObservation


# =============================================================================
# CONSTANTS
# =============================================================================

# Inverse-sum formula
INVERSE_SUM_NUMERATOR = 10000.0

# Exponential-decay formula
EXPONENTIAL_PEAK_SCORE = 100.0
EXPONENTIAL_DISTANCE_SCALE = 400.0
EXPONENTIAL_SPEED_SCALE = 8.0

# Engine relation: bullet speed = 20 - 3 * power
BULLET_SPEED_BASE = 20.0
BULLET_SPEED_PER_POWER = -3.0

# (minimum score, power) pairs, highest score first
FireThresholds = Sequence[Tuple[float, float]]


# =============================================================================
# ENUMS
# =============================================================================

class ScoringStrategy(Enum):
    """Available target scoring formulas."""
    INVERSE_SUM = "inverse_sum"
    EXPONENTIAL_DECAY = "exponential_decay"


# =============================================================================
# ANGLE HELPERS
# =============================================================================

def bearing_offset_rad(observation: TargetObservation, state: SelfState) -> float:
    """Angle between the gun and the line to the target, in [0, pi] radians."""
    return math.radians(abs(relative_angle(gun_bearing_to(state, observation))))


def heading_offset_rad(observation: TargetObservation, state: SelfState) -> float:
    """Angle between the gun and the target's own heading, in [0, pi] radians."""
    return math.radians(abs(relative_angle(observation.heading - state.gun_heading)))


# =============================================================================
# SCORERS
# =============================================================================

class TargetScorer(ABC):
    """
    Base class for target scoring strategies.

    A scorer turns a target observation into a single number. Higher means a
    better shot. Scores are only comparable within one strategy.
    """

    strategy: ScoringStrategy
    default_thresholds: FireThresholds = ()

    @abstractmethod
    def score(
        self,
        observation: TargetObservation,
        state: SelfState,
        average_velocity: float
    ) -> float:
        """
        Score a target.

        Args:
            observation: The scanned target.
            state: Own state (gun heading is used).
            average_velocity: Tracked average speed of the target.

        Returns:
            Non-negative score.
        """
        pass


class InverseSumScorer(TargetScorer):
    """
    10000 / ((distance/2 + 2*bearing_offset + heading_offset) * speed + 1)

    A stationary target scores the full 10000 whatever its range.
    """

    strategy = ScoringStrategy.INVERSE_SUM
    default_thresholds: FireThresholds = (
        (100.0, 3.0),
        (20.0, 2.0),
        (5.0, 1.0),
        (1.0, MIN_FIRE_POWER),
    )

    def score(
        self,
        observation: TargetObservation,
        state: SelfState,
        average_velocity: float
    ) -> float:
        spread = (
            observation.distance / 2
            + bearing_offset_rad(observation, state) * 2
            + heading_offset_rad(observation, state)
        )
        return INVERSE_SUM_NUMERATOR / (spread * abs(average_velocity) + 1)


class ExponentialDecayScorer(TargetScorer):
    """
    100 * exp(-distance/400) * (1 + cos(bearing_offset))/2 * exp(-speed/8)

    Peaks at 100 for a stationary target at point blank straight down the
    barrel and falls to zero for a target directly behind the gun.
    """

    strategy = ScoringStrategy.EXPONENTIAL_DECAY
    default_thresholds: FireThresholds = (
        (50.0, 3.0),
        (20.0, 2.0),
        (5.0, 1.0),
        (1.0, MIN_FIRE_POWER),
    )

    def score(
        self,
        observation: TargetObservation,
        state: SelfState,
        average_velocity: float
    ) -> float:
        distance_factor = math.exp(-max(0.0, observation.distance) / EXPONENTIAL_DISTANCE_SCALE)
        alignment_factor = (1 + math.cos(bearing_offset_rad(observation, state))) / 2
        speed_factor = math.exp(-abs(average_velocity) / EXPONENTIAL_SPEED_SCALE)
        return EXPONENTIAL_PEAK_SCORE * distance_factor * alignment_factor * speed_factor


_SCORERS = {
    ScoringStrategy.INVERSE_SUM: InverseSumScorer,
    ScoringStrategy.EXPONENTIAL_DECAY: ExponentialDecayScorer,
}


def create_scorer(strategy: ScoringStrategy) -> TargetScorer:
    """Build the scorer for a strategy."""
    return _SCORERS[strategy]()


# =============================================================================
# FIRE POWER AND LEAD
# =============================================================================

def fire_power_for_score(score: float, thresholds: FireThresholds) -> float:
    """
    Pick a bullet power for a score.

    Args:
        score: Score from a TargetScorer.
        thresholds: (minimum score, power) pairs; checked highest score first.

    Returns:
        Power of the first threshold the score reaches, clamped to the legal
        range, or 0.0 to hold fire. A band with power 0 or less holds fire.
    """
    for minimum, power in sorted(thresholds, key=lambda t: t[0], reverse=True):
        if score >= minimum:
            if power <= 0:
                return 0.0
            return max(MIN_FIRE_POWER, min(MAX_FIRE_POWER, power))
    return 0.0


def power_for_bullet_speed(speed: float) -> float:
    """Bullet power that produces the given bullet speed."""
    return (speed - BULLET_SPEED_BASE) / BULLET_SPEED_PER_POWER


def movement_compensation(observation: TargetObservation, state: SelfState) -> float:
    """
    Lead adjustment in degrees for a moving target.

    (bearing + target_heading / own_heading) / 8 * (velocity / 4) * distance / 400

    The heading ratio counts as 0 while own heading is exactly 0.
    """
    heading_ratio = observation.heading / state.heading if state.heading != 0 else 0.0
    relative_heading = observation.bearing + heading_ratio
    compensation = relative_heading / 8 * (observation.velocity / 4)
    return compensation * observation.distance / 400


# =============================================================================
# FIRING DECISION
# =============================================================================

@dataclass
class FiringDecision:
    """
    Outcome of scoring one target on one tick.

    Attributes:
        target_name: Target the decision is about.
        score: Score from the active strategy.
        power: Bullet power, 0.0 when holding fire.
        gun_turn: Degrees to turn the gun right to face the target.
        lead: Lead compensation in degrees (informational).
    """
    target_name: str
    score: float
    power: float
    gun_turn: float
    lead: float = 0.0

    @property
    def should_fire(self) -> bool:
        return self.power > 0

    def commands(self) -> List[Command]:
        """Gun turn, followed by a fire command unless holding fire."""
        commands: List[Command] = [TurnGunRight(self.gun_turn)]
        if self.should_fire:
            commands.append(Fire(self.power))
        return commands


def decide_fire(
    observation: TargetObservation,
    state: SelfState,
    scorer: TargetScorer,
    average_velocity: float,
    thresholds: Optional[FireThresholds] = None
) -> FiringDecision:
    """
    Score a target and turn the score into a firing decision.

    Args:
        observation: The scanned target.
        state: Own state.
        scorer: Active scoring strategy.
        average_velocity: Tracked average speed of the target.
        thresholds: Score-to-power table; the scorer's defaults when None.

    Returns:
        FiringDecision for this tick.
    """
    score = scorer.score(observation, state, average_velocity)
    table = scorer.default_thresholds if thresholds is None else thresholds
    return FiringDecision(
        target_name=observation.name,
        score=score,
        power=fire_power_for_score(score, table),
        gun_turn=relative_angle(gun_bearing_to(state, observation)),
        lead=movement_compensation(observation, state),
    )

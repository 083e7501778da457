"""
Host-facing core for one arenabot agent.

The host calls these handlers synchronously, one event at a time:
- on_scanned_target: an opponent or teammate came into view
- on_message_received: a teammate relayed one of its own sightings
- on_target_eliminated, on_bullet_hit, on_bullet_missed
- on_round_ended, on_death: print the accuracy report
- on_hit_robot: collision with another agent
- tick: per-tick wall avoidance

The core owns no loop. Commands go out through the CommandSink the host
passes in.
"""

from __future__ import annotations

from typing import Callable, Optional

from .avoidance import align_heading, steer_towards, turn_for_wall
from .commands import CommandSink, Fire, TurnLeft, TurnRight
from .config import AgentConfig
from .geometry import is_coincident, relative_angle
from .scoring import FiringDecision, TargetScorer, create_scorer, decide_fire
from .state import SelfState, TargetObservation
from .stats import BulletStats
from .tracking import VelocityTracker


# Receives opponent sightings so the host can relay them to teammates
ObservationRelay = Callable[[TargetObservation], None]


class TacticalCore:
    """
    Navigation and targeting decisions for one agent.

    Tracker, stats and scorer are injectable so several agents can share a
    process (or a tracker) and tests can inspect them directly.
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        tracker: Optional[VelocityTracker] = None,
        stats: Optional[BulletStats] = None,
        scorer: Optional[TargetScorer] = None,
        relay: Optional[ObservationRelay] = None,
    ) -> None:
        """
        Initialize the core.

        Args:
            config: Settings; defaults when None.
            tracker: Velocity tracker; a new one sized from config when None.
            stats: Bullet counters; fresh when None.
            scorer: Scoring strategy; built from config when None.
            relay: Called with every opponent sighting for teammates.
        """
        self.config = config if config is not None else AgentConfig()
        # An empty tracker is falsy, so compare against None
        if tracker is None:
            tracker = VelocityTracker(
                window=self.config.velocity_window,
                default_velocity=self.config.default_velocity,
            )
        self.tracker = tracker
        self.stats = stats if stats is not None else BulletStats()
        self.scorer = scorer if scorer is not None else create_scorer(self.config.scoring_strategy)
        self.relay = relay

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(f"[CORE] {message}")

    # -------------------------------------------------------------------------
    # Per-tick
    # -------------------------------------------------------------------------

    def tick(self, state: SelfState, sink: CommandSink) -> bool:
        """Run wall avoidance. Returns True if a turn was issued."""
        engaged = turn_for_wall(state, self.config.wall_perimeter, sink)
        if engaged:
            self._log(f"Avoiding wall at ({state.x:.1f}, {state.y:.1f}) heading {state.heading:.1f}")
        return engaged

    def steer_towards(self, state: SelfState, x: float, y: float, sink: CommandSink) -> bool:
        """Take one configured step towards (x, y). Returns True once arrived."""
        return steer_towards(
            state, x, y, sink,
            step=self.config.step_distance,
            margin=self.config.arrival_margin,
        )

    def align_heading(self, state: SelfState, heading: float, sink: CommandSink) -> bool:
        """Turn towards an absolute heading within the configured precision."""
        return align_heading(state, heading, sink, precision=self.config.heading_precision)

    def weakest_target(self) -> Optional[str]:
        """Tracked opponent with the lowest average speed, or None."""
        return self.tracker.weakest_target()

    def score_target(self, state: SelfState, observation: TargetObservation) -> float:
        """Score a target with the active strategy and its tracked speed."""
        return self.scorer.score(
            observation, state, self.tracker.average_velocity(observation.name)
        )

    # -------------------------------------------------------------------------
    # Host notifications
    # -------------------------------------------------------------------------

    def on_scanned_target(
        self,
        state: SelfState,
        observation: TargetObservation,
        sink: Optional[CommandSink] = None
    ) -> Optional[FiringDecision]:
        """
        Handle a scanner sighting.

        Teammates are ignored. Opponents get a velocity sample, are relayed
        to teammates, and are scored. A target reported at our own position
        is a no-op tick.

        Args:
            state: Own state for this tick.
            observation: The sighting.
            sink: When given, the decision's gun and fire commands are issued.

        Returns:
            FiringDecision, or None for teammates and degenerate sightings.
        """
        if observation.is_teammate:
            return None

        self.tracker.record_observation(observation.name, observation.velocity)
        self._relay(observation)

        if is_coincident(state.position, observation.absolute_position(state)):
            self._log(f"Ignoring {observation.name}: reported at own position")
            return None

        decision = decide_fire(
            observation,
            state,
            self.scorer,
            self.tracker.average_velocity(observation.name),
            self.config.fire_thresholds,
        )
        self._log(
            f"{observation.name}: score={decision.score:.2f} power={decision.power:.1f} "
            f"gun_turn={decision.gun_turn:.1f}"
        )
        if sink is not None:
            for command in decision.commands():
                sink.issue(command)
        return decision

    def _relay(self, observation: TargetObservation) -> None:
        if self.relay is None:
            return
        try:
            self.relay(observation)
        except Exception as e:
            print(f"[CORE] Could not relay sighting of {observation.name}: {e}")

    def on_message_received(self, observation: TargetObservation) -> None:
        """Record a sighting relayed by a teammate."""
        if observation.is_teammate:
            return
        self.tracker.record_observation(observation.name, observation.velocity)

    def on_target_eliminated(self, name: str) -> None:
        self.tracker.remove_target(name)
        self._log(f"{name} eliminated, {len(self.tracker)} targets tracked")

    def on_bullet_hit(self) -> None:
        self.stats.record_hit()

    def on_bullet_missed(self) -> None:
        self.stats.record_miss()

    def on_round_ended(self) -> None:
        self.stats.print_report()

    def on_death(self) -> None:
        self.stats.print_report()

    def on_hit_robot(
        self,
        name: str,
        bearing: float,
        is_teammate: bool,
        sink: CommandSink
    ) -> None:
        """
        Handle a collision with another agent.

        Teammates: turn away. Opponents: face them and fire at ram power.
        """
        if is_teammate:
            sink.issue(TurnLeft(self.config.teammate_evade_turn))
            return
        sink.issue(TurnRight(relative_angle(bearing)))
        sink.issue(Fire(self.config.ram_fire_power))
        self._log(f"Rammed {name}, firing at {self.config.ram_fire_power}")

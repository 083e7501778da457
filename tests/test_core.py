"""
Tests for the host-facing core.

Tests cover:
- Scanner sightings: tracking, scoring, relaying, teammates, degenerate ticks
- Relayed sightings and eliminations
- Bullet outcomes and the accuracy report
- Collisions and per-tick wall avoidance
- Injected collaborators
- Steering and heading steps using configured distances and precision
"""

import pytest
from unittest.mock import Mock

from arenabot.commands import CommandBuffer, Fire, MoveAhead, TurnGunRight, TurnLeft, TurnRight
from arenabot.config import AgentConfig
from arenabot.core import TacticalCore
from arenabot.scoring import ExponentialDecayScorer, InverseSumScorer, ScoringStrategy
from arenabot.state import ArenaBounds, SelfState, TargetObservation
from arenabot.stats import BulletStats
from arenabot.tracking import VelocityTracker


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def state():
    return SelfState(x=400, y=300, heading=0, gun_heading=0, arena=ArenaBounds(800, 600))


@pytest.fixture
def core():
    return TacticalCore(AgentConfig())


@pytest.fixture
def sink():
    return CommandBuffer()


def opponent(name="Crusher", velocity=8.0, **kwargs):
    values = dict(bearing=10.0, distance=200.0, heading=90.0)
    values.update(kwargs)
    return TargetObservation(name=name, velocity=velocity, **values)


# =============================================================================
# SIGHTING TESTS
# =============================================================================

class TestOnScannedTarget:
    """Tests for scanner sightings."""

    def test_records_velocity(self, core, state):
        core.on_scanned_target(state, opponent(velocity=-6.0))
        assert core.tracker.history("Crusher") == [6.0]

    def test_returns_decision(self, core, state):
        decision = core.on_scanned_target(state, opponent())
        assert decision is not None
        assert decision.target_name == "Crusher"
        assert decision.gun_turn == pytest.approx(10.0)

    def test_uses_tracked_average(self, core, state):
        """The score is computed from the tracked average, not the latest sample."""
        core.on_scanned_target(state, opponent(velocity=2.0))
        decision = core.on_scanned_target(state, opponent(velocity=10.0))
        expected = InverseSumScorer().score(opponent(), state, 6.0)
        assert decision.score == pytest.approx(expected)

    def test_issues_commands_to_sink(self, core, state, sink):
        decision = core.on_scanned_target(state, opponent(velocity=0.0), sink)
        assert sink.commands == decision.commands()
        assert sink.commands[0] == TurnGunRight(10.0)
        assert isinstance(sink.commands[1], Fire)

    def test_teammate_ignored(self, core, state, sink):
        decision = core.on_scanned_target(state, opponent(is_teammate=True), sink)
        assert decision is None
        assert "Crusher" not in core.tracker
        assert len(sink) == 0

    def test_coincident_target_is_noop(self, core, state, sink):
        """A target at our own position is tracked but not fired at."""
        decision = core.on_scanned_target(state, opponent(distance=0.0), sink)
        assert decision is None
        assert len(sink) == 0
        assert "Crusher" in core.tracker

    def test_relay_receives_sighting(self, state):
        relay = Mock()
        core = TacticalCore(AgentConfig(), relay=relay)
        sighting = opponent()
        core.on_scanned_target(state, sighting)
        relay.assert_called_once_with(sighting)

    def test_relay_failure_does_not_stop_tick(self, state, capsys):
        relay = Mock(side_effect=IOError("channel closed"))
        core = TacticalCore(AgentConfig(), relay=relay)
        decision = core.on_scanned_target(state, opponent())
        assert decision is not None
        assert "Could not relay sighting of Crusher" in capsys.readouterr().out

    def test_score_target_without_history_uses_prior(self, core, state):
        """Unseen targets are scored with the 20 prior."""
        expected = InverseSumScorer().score(opponent(), state, 20.0)
        assert core.score_target(state, opponent()) == pytest.approx(expected)

    def test_verbose_logs_decision(self, state, capsys):
        core = TacticalCore(AgentConfig(verbose=True))
        core.on_scanned_target(state, opponent())
        assert "[CORE] Crusher: score=" in capsys.readouterr().out


class TestTrackingNotifications:
    """Tests for relayed sightings, eliminations and target selection."""

    def test_message_received_records(self, core):
        core.on_message_received(opponent(name="Sniper", velocity=-3.0))
        assert core.tracker.average_velocity("Sniper") == 3.0

    def test_message_about_teammate_ignored(self, core):
        core.on_message_received(opponent(name="Buddy", is_teammate=True))
        assert "Buddy" not in core.tracker

    def test_elimination_reverts_to_prior(self, core, state):
        core.on_scanned_target(state, opponent(velocity=4.0))
        core.on_target_eliminated("Crusher")
        assert core.tracker.average_velocity("Crusher") == 20

    def test_weakest_target(self, core, state):
        core.on_scanned_target(state, opponent(name="A", velocity=30))
        core.on_scanned_target(state, opponent(name="B", velocity=10))
        core.on_message_received(opponent(name="C", velocity=20))
        assert core.weakest_target() == "B"

    def test_weakest_target_none(self, core):
        assert core.weakest_target() is None


# =============================================================================
# OUTCOME TESTS
# =============================================================================

class TestBulletOutcomes:
    """Tests for bullet notifications and reports."""

    def test_accuracy(self, core):
        for _ in range(3):
            core.on_bullet_hit()
        core.on_bullet_missed()
        assert core.stats.accuracy == 75.0

    @pytest.mark.parametrize("handler", ["on_round_ended", "on_death"])
    def test_report_printed(self, core, capsys, handler):
        core.on_bullet_hit()
        getattr(core, handler)()
        assert "Fire accuracy: 100.0% (1/1)" in capsys.readouterr().out


class TestOnHitRobot:
    """Tests for collisions."""

    def test_teammate_turn_away(self, core, sink):
        core.on_hit_robot("Buddy", 30.0, True, sink)
        assert sink.commands == [TurnLeft(90.0)]

    def test_opponent_face_and_fire(self, core, sink):
        core.on_hit_robot("Crusher", 200.0, False, sink)
        assert sink.commands == [TurnRight(-160.0), Fire(3.0)]


# =============================================================================
# TICK AND INJECTION TESTS
# =============================================================================

class TestTick:
    """Tests for per-tick wall avoidance."""

    def test_uses_configured_perimeter(self, sink):
        near_wall = SelfState(x=50, y=50, heading=0, gun_heading=0, arena=ArenaBounds(800, 600))
        assert TacticalCore(AgentConfig(wall_perimeter=40)).tick(near_wall, sink) is False
        assert TacticalCore(AgentConfig(wall_perimeter=100)).tick(near_wall, sink) is True
        assert sink.commands == [TurnRight(16.0)]


class TestInjection:
    """Tests for injected collaborators."""

    def test_shared_tracker(self, state):
        tracker = VelocityTracker()
        first = TacticalCore(tracker=tracker)
        second = TacticalCore(tracker=tracker)
        first.on_scanned_target(state, opponent(velocity=5))
        assert second.weakest_target() == "Crusher"

    def test_separate_cores_are_isolated(self, state):
        first = TacticalCore()
        second = TacticalCore()
        first.on_scanned_target(state, opponent())
        assert "Crusher" not in second.tracker

    def test_scorer_from_config(self):
        core = TacticalCore(AgentConfig(scoring_strategy=ScoringStrategy.EXPONENTIAL_DECAY))
        assert isinstance(core.scorer, ExponentialDecayScorer)

    def test_tracker_sized_from_config(self):
        core = TacticalCore(AgentConfig(velocity_window=3, default_velocity=12.0))
        assert core.tracker.window == 3
        assert core.tracker.average_velocity("Nobody") == 12.0

    def test_empty_tracker_is_kept(self, state):
        """An injected tracker is used even before it tracks anything."""
        tracker = VelocityTracker(window=2)
        core = TacticalCore(AgentConfig(velocity_window=20), tracker=tracker)
        assert core.tracker is tracker
        core.on_scanned_target(state, opponent(velocity=6))
        assert tracker.history("Crusher") == [6.0]

    def test_injected_stats(self):
        stats = BulletStats()
        core = TacticalCore(stats=stats)
        core.on_bullet_hit()
        core.on_bullet_missed()
        assert core.stats is stats
        assert stats.shots_fired == 2
        assert stats.accuracy == 50.0

    def test_injected_scorer_overrides_config(self, state):
        """The injected scorer wins over the configured strategy."""
        scorer = ExponentialDecayScorer()
        core = TacticalCore(AgentConfig(scoring_strategy=ScoringStrategy.INVERSE_SUM), scorer=scorer)
        assert core.scorer is scorer
        decision = core.on_scanned_target(state, opponent())
        assert decision.score == pytest.approx(scorer.score(opponent(), state, 8.0))


# =============================================================================
# NAVIGATION TESTS
# =============================================================================

class TestNavigation:
    """Tests for steering and heading steps driven by config."""

    def test_steer_uses_configured_step(self, state, sink):
        core = TacticalCore(AgentConfig(step_distance=25.0))
        assert core.steer_towards(state, 500, 400, sink) is False
        assert sink.commands[-1] == MoveAhead(25.0)

    def test_steer_uses_configured_margin(self, state, sink):
        """50 units away: outside 18 + 5, inside 18 + 40."""
        assert TacticalCore().steer_towards(state, 400, 350, sink) is False
        assert TacticalCore(AgentConfig(arrival_margin=40.0)).steer_towards(state, 400, 250, CommandBuffer()) is True

    def test_align_uses_configured_precision(self, state, sink):
        """A heading 5 degrees off is close enough at precision 10 only."""
        assert TacticalCore(AgentConfig(heading_precision=10.0)).align_heading(state, 5.0, sink) is True
        assert len(sink) == 0
        assert TacticalCore().align_heading(state, 5.0, sink) is False
        assert sink.commands == [TurnLeft(-5.0)]

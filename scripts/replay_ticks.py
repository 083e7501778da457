#!/usr/bin/env python3
"""
Replay recorded ticks through the arenabot core.

Each tick in the scenario file holds the agent's own state, an optional
scanner observation and optional host events. The commands the core issues
are printed per tick, followed by the accuracy report.

Scenario format:
    {
      "ticks": [
        {
          "self": {"x": 50, "y": 50, "heading": 45, "gun_heading": 45,
                   "arena": {"width": 800, "height": 600}},
          "observation": {"name": "Crusher", "bearing": 10, "distance": 200,
                          "heading": 90, "velocity": 8},
          "events": ["bullet_hit", {"type": "target_eliminated", "name": "Crusher"}]
        }
      ]
    }

Usage:
    python scripts/replay_ticks.py --scenario ticks.json
    python scripts/replay_ticks.py --scenario ticks.json --config agent.json --verbose
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from arenabot.commands import CommandBuffer
from arenabot.config import AgentConfig
from arenabot.core import TacticalCore
from arenabot.state import SelfState, TargetObservation


def apply_event(core: TacticalCore, event) -> None:
    """Dispatch one host event to the core."""
    if isinstance(event, str):
        event = {"type": event}
    kind = event.get("type")
    if kind == "bullet_hit":
        core.on_bullet_hit()
    elif kind == "bullet_missed":
        core.on_bullet_missed()
    elif kind == "target_eliminated":
        core.on_target_eliminated(event["name"])
    elif kind == "message":
        core.on_message_received(TargetObservation.from_dict(event["observation"]))
    elif kind == "round_ended":
        core.on_round_ended()
    elif kind == "death":
        core.on_death()
    else:
        print(f"[REPLAY] Unknown event: {kind}")


def replay(core: TacticalCore, ticks: list) -> None:
    sink = CommandBuffer()
    for index, tick in enumerate(ticks):
        state = SelfState.from_dict(tick["self"])
        core.tick(state, sink)

        if "observation" in tick:
            core.on_scanned_target(state, TargetObservation.from_dict(tick["observation"]), sink)

        for event in tick.get("events", []):
            apply_event(core, event)

        commands = sink.drain()
        issued = ", ".join(repr(c) for c in commands) if commands else "-"
        print(f"[TICK {index:4d}] {issued}")

    weakest = core.weakest_target()
    print(f"Weakest target: {weakest if weakest is not None else 'none'}")


def main():
    parser = argparse.ArgumentParser(
        description="Replay recorded ticks through the arenabot core",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scenario",
        required=True,
        help="JSON file with a 'ticks' list",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Agent config JSON (default: ARENABOT_* environment)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    args = parser.parse_args()

    config = AgentConfig.from_json(args.config) if args.config else AgentConfig.from_env()
    if args.verbose:
        config.verbose = True

    scenario_path = Path(args.scenario)
    if not scenario_path.exists():
        print(f"[REPLAY] Scenario not found: {args.scenario}")
        return 1
    with open(scenario_path) as f:
        scenario = json.load(f)

    core = TacticalCore(config)
    replay(core, scenario.get("ticks", []))
    core.stats.print_report()
    return 0


if __name__ == "__main__":
    sys.exit(main())

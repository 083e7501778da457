"""Bullet outcome accounting."""

from __future__ import annotations

import threading


REPORT_RULE = "-" * 59


class BulletStats:
    """
    Hit and miss counters for the agent's bullets.

    Counters only ever grow. Accuracy is a percentage and is 0.0 before the
    first bullet resolves.
    """

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def shots_fired(self) -> int:
        return self._hits + self._misses

    def record_hit(self) -> None:
        with self._lock:
            self._hits += 1

    def record_miss(self) -> None:
        with self._lock:
            self._misses += 1

    @property
    def accuracy(self) -> float:
        """Hits as a percentage of resolved shots (0.0 when none)."""
        with self._lock:
            fired = self._hits + self._misses
            if fired == 0:
                return 0.0
            return self._hits / fired * 100

    def format_report(self) -> str:
        """Framed accuracy block shown at round end and on death."""
        return "\n".join([
            REPORT_RULE,
            f"Fire accuracy: {self.accuracy:.1f}% ({self.hits}/{self.shots_fired})",
            REPORT_RULE,
        ])

    def print_report(self) -> None:
        print(self.format_report())

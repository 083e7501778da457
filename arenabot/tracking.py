"""
Velocity tracking and target selection.

Keeps a rolling record of each opponent's observed speed:
- A history is created the first time a target is seen
- Every later sighting appends the absolute velocity
- The history is dropped when the host reports the target eliminated

Only the most recent samples are kept (20 by default), and averages use all
of them. A target that has never been seen gets a neutral prior instead of
an error.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Dict, List, Optional

import numpy as np


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_VELOCITY = 20.0  # Prior for targets with no history
DEFAULT_WINDOW = 20  # Samples averaged per target


# =============================================================================
# VELOCITY TRACKER
# =============================================================================

class VelocityTracker:
    """
    Per-target history of observed absolute speeds.

    One tracker is owned by each agent core and passed to whatever needs it.
    A single lock guards every read-modify-write so a host that delivers
    events from several threads still sees consistent histories.
    """

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        default_velocity: float = DEFAULT_VELOCITY
    ) -> None:
        """
        Initialize an empty tracker.

        Args:
            window: Number of most recent samples kept and averaged per target.
            default_velocity: Average reported for untracked targets.
        """
        if window < 1:
            raise ValueError("Averaging window must be at least 1 sample")
        self.window = window
        self.default_velocity = default_velocity
        self._histories: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def record_observation(self, name: str, velocity: float) -> None:
        """
        Append a speed sample for a target, creating its history if needed.

        Args:
            name: Target identifier.
            velocity: Signed velocity; its absolute value is stored.
        """
        with self._lock:
            history = self._histories.get(name)
            if history is None:
                history = self._histories[name] = deque(maxlen=self.window)
            history.append(abs(velocity))

    def average_velocity(self, name: str) -> float:
        """
        Mean of the most recent samples for a target.

        Args:
            name: Target identifier.

        Returns:
            Mean of the retained samples, or the default prior if
            the target is not tracked.
        """
        with self._lock:
            return self._average_unlocked(name)

    def _average_unlocked(self, name: str) -> float:
        history = self._histories.get(name)
        if not history:
            return self.default_velocity
        return float(np.mean(history))

    def remove_target(self, name: str) -> None:
        """Forget a target entirely. Unknown names are ignored."""
        with self._lock:
            self._histories.pop(name, None)

    def weakest_target(self) -> Optional[str]:
        """
        Tracked target with the lowest average speed.

        Returns:
            Target name, or None when nothing is tracked. On equal averages
            the target tracked first wins.
        """
        with self._lock:
            weakest = None
            weakest_average = 0.0
            for name in self._histories:
                average = self._average_unlocked(name)
                if weakest is None or average < weakest_average:
                    weakest = name
                    weakest_average = average
            return weakest

    def history(self, name: str) -> List[float]:
        """Retained samples for a target, oldest first (copy)."""
        with self._lock:
            return list(self._histories.get(name, []))

    def tracked_targets(self) -> List[str]:
        """Names of all tracked targets in first-seen order."""
        with self._lock:
            return list(self._histories)

    def clear(self) -> None:
        """Forget every target."""
        with self._lock:
            self._histories.clear()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._histories

    def __len__(self) -> int:
        with self._lock:
            return len(self._histories)

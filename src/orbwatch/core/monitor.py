"""Stateful helpers for the loop that drives the engine.

The engine functions are pure. These classes hold the per-session state a
display loop needs between ticks: the latest position of every body, short
position trails, and the current alert list. Simulation time is always passed
in by the caller; nothing here reads a clock.
"""
from __future__ import annotations

import dataclasses
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Mapping, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from orbwatch.core.alerts import merge_events
from orbwatch.core.bodies import Body
from orbwatch.core.collisions import CollisionEvent, detect_positions
from orbwatch.core.prediction import predict
from orbwatch.core.propagation import InclinationMode, positions_by_id
from orbwatch.utils.constants import (
    DEFAULT_ALERT_LIMIT,
    DEFAULT_DETECTION_PERIOD,
    DEFAULT_PREDICTION_STEP,
    DEFAULT_PREDICTION_STEPS,
    DEFAULT_TRAIL_LENGTH,
    KDTREE_MIN_BODIES,
)

logger = logging.getLogger(__name__)


@dataclass
class PositionTracker:
    """Latest position and a bounded trail for every body.

    Attributes:
        trail_length: Number of recent positions kept per body.
        inclination_mode: Orbital plane orientation mode.
        positions: Latest position of each body, keyed by id.
    """

    trail_length: int = DEFAULT_TRAIL_LENGTH
    inclination_mode: InclinationMode = InclinationMode.TILT
    positions: dict[str, NDArray[np.float64]] = field(default_factory=dict)
    _trails: dict[str, deque] = field(default_factory=dict, repr=False)

    def update(self, bodies: Sequence[Body], t: float) -> dict[str, NDArray[np.float64]]:
        """Propagate all bodies to ``t`` and record the result.

        Bodies that are no longer in ``bodies`` are forgotten.

        Returns:
            The updated id -> position map.
        """
        self.positions = positions_by_id(bodies, t, self.inclination_mode)

        for stale in set(self._trails) - set(self.positions):
            del self._trails[stale]
        for body_id, pos in self.positions.items():
            trail = self._trails.get(body_id)
            if trail is None:
                trail = self._trails[body_id] = deque(maxlen=self.trail_length)
            trail.append(pos.copy())

        return self.positions

    def trail(self, body_id: str) -> NDArray[np.float64]:
        """Recent positions of a body, oldest first, shape (k, 3)."""
        trail = self._trails.get(body_id)
        if not trail:
            return np.empty((0, 3), dtype=np.float64)
        return np.array(trail)

    def reset(self) -> None:
        self.positions = {}
        self._trails.clear()


@dataclass
class CollisionMonitor:
    """Runs detection and prediction on a coarse cadence and keeps alerts.

    Attributes:
        detection_period: Simulation time between runs.
        prediction_steps: Forward steps examined per run.
        prediction_step_size: Simulation time between forward steps.
        alert_limit: Number of alerts kept after merging.
        kdtree_min_bodies: Body count from which the KD-tree search is used.
        inclination_mode: Orbital plane orientation mode for prediction.
        alerts: Current merged alert list.
    """

    detection_period: float = DEFAULT_DETECTION_PERIOD
    prediction_steps: int = DEFAULT_PREDICTION_STEPS
    prediction_step_size: float = DEFAULT_PREDICTION_STEP
    alert_limit: int | None = DEFAULT_ALERT_LIMIT
    kdtree_min_bodies: int = KDTREE_MIN_BODIES
    inclination_mode: InclinationMode = InclinationMode.TILT
    alerts: list[CollisionEvent] = field(default_factory=list)
    _last_run: float | None = field(default=None, repr=False)

    def due(self, t: float) -> bool:
        """Whether a run is due at simulation time ``t``."""
        return self._last_run is None or t - self._last_run >= self.detection_period

    def _carry_over(self, t: float) -> list[CollisionEvent]:
        """Previous predictions still ahead of ``t``, re-timed relative to ``t``.

        Instantaneous events belong to the run that detected them and are
        dropped; the current run re-detects whatever is still overlapping.
        """
        if self._last_run is None:
            return []
        elapsed = t - self._last_run
        kept = []
        for event in self.alerts:
            if event.time_to_collision is None:
                continue
            remaining = event.time_to_collision - elapsed
            if remaining > 0:
                kept.append(dataclasses.replace(event, time_to_collision=remaining))
        return kept

    def check(
        self,
        bodies: Sequence[Body],
        positions: Mapping[str, ArrayLike],
        t: float,
        force: bool = False,
    ) -> list[CollisionEvent]:
        """Refresh alerts if a run is due.

        Each run replaces the alert list: current overlaps and predictions
        from ``t`` onwards, merged with the previous run's predictions that
        still lie in the future.

        Args:
            bodies: Current body batch.
            positions: Latest position of each body, keyed by id.
            t: Current simulation time.
            force: Run even if the detection period has not elapsed.

        Returns:
            The current alert list.
        """
        if not (force or self.due(t)):
            return self.alerts

        previous = self._carry_over(t)
        previous_pairs = {e.pair for e in self.alerts}
        self._last_run = t
        use_kdtree = len(bodies) >= self.kdtree_min_bodies

        current = detect_positions(bodies, positions, use_kdtree=use_kdtree)
        upcoming = predict(
            bodies,
            self.prediction_steps,
            self.prediction_step_size,
            start=t,
            inclination_mode=self.inclination_mode,
            use_kdtree=use_kdtree,
        )

        self.alerts = merge_events(previous, current + upcoming, self.alert_limit)

        new_pairs = [e for e in self.alerts if e.pair not in previous_pairs]
        if new_pairs:
            logger.info(
                "Collision monitor at t=%.2f: %d current, %d predicted, %d new alerts",
                t, len(current), len(upcoming), len(new_pairs),
            )
        return self.alerts

    def reset(self) -> None:
        """Forget alerts and cadence, e.g. after a new body batch."""
        self.alerts = []
        self._last_run = None

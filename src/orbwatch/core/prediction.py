"""Forward-looking collision prediction over fixed time steps."""
from __future__ import annotations

import logging
from typing import Sequence

from orbwatch.core.bodies import Body
from orbwatch.core.collisions import CollisionEvent, find_collisions
from orbwatch.core.propagation import InclinationMode, propagate_batch
from orbwatch.utils.constants import DEFAULT_PREDICTION_STEP, DEFAULT_PREDICTION_STEPS

logger = logging.getLogger(__name__)


def predict(
    bodies: Sequence[Body],
    steps: int = DEFAULT_PREDICTION_STEPS,
    step_size: float = DEFAULT_PREDICTION_STEP,
    *,
    start: float = 0.0,
    inclination_mode: InclinationMode = InclinationMode.TILT,
    use_kdtree: bool = False,
) -> list[CollisionEvent]:
    """Predict collisions at ``step_size, 2 * step_size, ..., steps * step_size`` ahead.

    Each step is an independent propagation of every body to
    ``start + step * step_size``, followed by a pairwise scan of that step's
    positions.

    Args:
        bodies: Bodies to screen.
        steps: Number of forward steps.
        step_size: Simulation time between steps.
        start: Simulation time the steps are measured from. The default
            measures from the simulation epoch.
        inclination_mode: Orbital plane orientation mode.
        use_kdtree: Use the KD-tree pair search for each step.

    Returns:
        Events of every step concatenated in increasing step order, each with
        ``time_to_collision`` set to its offset from ``start``. Not sorted or
        de-duplicated across steps.
    """
    if steps <= 0 or len(bodies) < 2:
        logger.debug("predict: nothing to screen (%d bodies, %d steps)", len(bodies), steps)
        return []

    events: list[CollisionEvent] = []
    for step in range(1, steps + 1):
        offset = step * step_size
        positions = propagate_batch(bodies, start + offset, inclination_mode)
        events.extend(
            find_collisions(bodies, positions, time_to_collision=offset, use_kdtree=use_kdtree)
        )

    logger.debug("predict: %d bodies, %d steps from t=%s, %d events", len(bodies), steps, start, len(events))
    return events

"""Merging collision events into a short, ordered alert list."""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from orbwatch.core.collisions import CollisionEvent
from orbwatch.utils.constants import DEFAULT_ALERT_LIMIT

logger = logging.getLogger(__name__)


def alert_sort_key(event: CollisionEvent) -> tuple[float, float]:
    """Ordering key: soonest first, then closest.

    Instantaneous events count as ``time_to_collision == 0``.
    """
    ttc = event.time_to_collision if event.time_to_collision is not None else 0.0
    return ttc, event.distance


def merge_events(
    previous: Iterable[CollisionEvent],
    new: Iterable[CollisionEvent],
    limit: int | None = DEFAULT_ALERT_LIMIT,
) -> list[CollisionEvent]:
    """Merge two event lists into one alert list.

    Events are de-duplicated by their unordered pair of body ids, keeping the
    one with the smallest :func:`alert_sort_key`, then sorted by that key.

    Args:
        previous: Alerts from the last cycle.
        new: Events from the current cycle.
        limit: Maximum number of alerts to keep. ``None`` keeps all.

    Returns:
        The merged alert list.
    """
    best: dict[frozenset[str], CollisionEvent] = {}
    for event in [*previous, *new]:
        key = event.pair
        if key not in best or alert_sort_key(event) < alert_sort_key(best[key]):
            best[key] = event

    merged = sorted(best.values(), key=alert_sort_key)
    if limit is not None:
        merged = merged[:limit]
    logger.debug("merge_events: %d unique pairs, keeping %d", len(best), len(merged))
    return merged


def event_midpoint(
    event: CollisionEvent, positions: Mapping[str, ArrayLike]
) -> NDArray[np.float64] | None:
    """Mid-point between the two bodies of an event, for placing a marker.

    Returns ``None`` if either body has no entry in ``positions``.
    """
    p1 = positions.get(event.body1.id)
    p2 = positions.get(event.body2.id)
    if p1 is None or p2 is None:
        return None
    return (np.asarray(p1, dtype=np.float64) + np.asarray(p2, dtype=np.float64)) / 2.0

"""Collision detection: find pairs of bodies whose spheres overlap."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial import cKDTree

from orbwatch.core.bodies import Body

logger = logging.getLogger(__name__)


@dataclass
class CollisionEvent:
    """A detected or predicted close approach between two bodies.

    Attributes:
        body1: First body of the pair (earlier in scan order).
        body2: Second body of the pair.
        distance: Distance between the two positions at the event time.
        time_to_collision: Simulation time offset of a predicted event.
            ``None`` for events detected at the current instant.
    """

    body1: Body
    body2: Body
    distance: float
    time_to_collision: float | None = None

    @property
    def pair(self) -> frozenset[str]:
        """Unordered pair of body ids."""
        return frozenset((self.body1.id, self.body2.id))

    @property
    def is_predicted(self) -> bool:
        return self.time_to_collision is not None


def _exhaustive_pairs(
    positions: NDArray[np.float64], sizes: NDArray[np.float64]
) -> tuple[NDArray[np.intp], NDArray[np.intp], NDArray[np.float64]]:
    """All pairs i < j with distance < size_i + size_j, in (i, j) order.

    Bodies with a non-finite size never collide.
    """
    i, j = np.triu_indices(len(positions), k=1)
    with np.errstate(invalid="ignore", over="ignore"):
        diff = positions[i] - positions[j]
        dist = np.sqrt(np.sum(diff * diff, axis=1))
        sized = np.isfinite(sizes[i]) & np.isfinite(sizes[j])
        hit = sized & (dist < sizes[i] + sizes[j])
    return i[hit], j[hit], dist[hit]


def _kdtree_pairs(
    positions: NDArray[np.float64], sizes: NDArray[np.float64]
) -> tuple[NDArray[np.intp], NDArray[np.intp], NDArray[np.float64]]:
    """Same result as :func:`_exhaustive_pairs`, using a KD-tree for candidates."""
    empty = (np.empty(0, dtype=np.intp), np.empty(0, dtype=np.intp), np.empty(0))

    # Non-finite rows can never satisfy the strict distance test
    valid = np.all(np.isfinite(positions), axis=1) & np.isfinite(sizes)
    idx_map = np.where(valid)[0]
    if len(idx_map) < 2:
        return empty

    pos_valid = positions[valid]
    radius = 2.0 * float(np.max(sizes[valid]))
    if radius <= 0:
        return empty

    tree = cKDTree(pos_valid)
    close = tree.query_pairs(radius, output_type="ndarray")
    if len(close) == 0:
        return empty

    i = idx_map[close[:, 0]]
    j = idx_map[close[:, 1]]
    lo, hi = np.minimum(i, j), np.maximum(i, j)
    order = np.lexsort((hi, lo))
    lo, hi = lo[order], hi[order]

    diff = positions[lo] - positions[hi]
    dist = np.sqrt(np.sum(diff * diff, axis=1))
    hit = dist < sizes[lo] + sizes[hi]
    return lo[hit], hi[hit], dist[hit]


def find_collisions(
    bodies: Sequence[Body],
    positions: ArrayLike,
    *,
    time_to_collision: float | None = None,
    use_kdtree: bool = False,
) -> list[CollisionEvent]:
    """Scan every unordered pair of bodies for sphere overlap.

    A pair collides when the distance between its positions is strictly
    smaller than the sum of the two sizes. This is a sampled test: fast
    bodies can pass through each other between two scans.

    Args:
        bodies: Bodies to scan.
        positions: Array of shape (n, 3), row k holding the position of
            ``bodies[k]``.
        time_to_collision: Value stamped on every event (``None`` for the
            current instant).
        use_kdtree: Find candidate pairs with a KD-tree instead of the
            O(n^2) distance scan. Returns the same events.

    Returns:
        Events in pair iteration order (i < j), not de-duplicated.
    """
    if len(bodies) < 2:
        return []

    pos = np.asarray(positions, dtype=np.float64).reshape(len(bodies), 3)
    sizes = np.array([b.size for b in bodies], dtype=np.float64)

    if use_kdtree:
        i, j, dist = _kdtree_pairs(pos, sizes)
    else:
        i, j, dist = _exhaustive_pairs(pos, sizes)

    events = [
        CollisionEvent(
            body1=bodies[a],
            body2=bodies[b],
            distance=float(d),
            time_to_collision=time_to_collision,
        )
        for a, b, d in zip(i.tolist(), j.tolist(), dist.tolist())
    ]
    logger.debug("find_collisions: %d bodies, %d events", len(bodies), len(events))
    return events


def detect(entries: Iterable[tuple[Body, ArrayLike]]) -> list[CollisionEvent]:
    """Detect collisions among bodies at their current positions.

    Args:
        entries: (body, position) pairs.

    Returns:
        Instantaneous events (``time_to_collision`` is ``None``).
    """
    entries = list(entries)
    if len(entries) < 2:
        return []
    bodies = [body for body, _ in entries]
    positions = np.array([np.asarray(p, dtype=np.float64) for _, p in entries])
    return find_collisions(bodies, positions)


def detect_positions(
    bodies: Sequence[Body],
    positions: Mapping[str, ArrayLike],
    *,
    use_kdtree: bool = False,
) -> list[CollisionEvent]:
    """Detect collisions using a body id -> position map.

    Bodies missing from ``positions`` are left out of the scan.

    Args:
        bodies: Bodies to scan.
        positions: Latest position of each body, keyed by id.
        use_kdtree: Use the KD-tree pair search.

    Returns:
        Instantaneous events in pair iteration order.
    """
    present = [b for b in bodies if b.id in positions]
    if len(present) != len(bodies):
        logger.debug("detect_positions: %d bodies have no position yet", len(bodies) - len(present))
    if len(present) < 2:
        return []
    pos = np.array([np.asarray(positions[b.id], dtype=np.float64) for b in present])
    return find_collisions(present, pos, use_kdtree=use_kdtree)

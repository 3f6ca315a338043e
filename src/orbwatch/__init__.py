"""
orbwatch — Orbit propagation and close-approach alerts for Python.

Computation core for Earth-orbit visualizers: places satellites,
asteroids, debris and comets on closed-form elliptical orbits and
flags pairs of bodies that overlap now or at future time steps.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from orbwatch.core.bodies import Body, BodyCategory, category_counts
from orbwatch.core.propagation import InclinationMode, position, propagate_batch, positions_by_id
from orbwatch.core.collisions import CollisionEvent, detect, detect_positions, find_collisions
from orbwatch.core.prediction import predict
from orbwatch.core.alerts import alert_sort_key, merge_events, event_midpoint
from orbwatch.core.monitor import CollisionMonitor, PositionTracker
from orbwatch.data.synthetic import generate_body, generate_bodies
from orbwatch.data.catalog import body_from_record, parse_catalog, load_catalog_json
from orbwatch.utils.constants import MIN_ORBIT_DISTANCE

__all__ = [
    "__version__",
    "Body",
    "BodyCategory",
    "category_counts",
    "InclinationMode",
    "position",
    "propagate_batch",
    "positions_by_id",
    "CollisionEvent",
    "detect",
    "detect_positions",
    "find_collisions",
    "predict",
    "alert_sort_key",
    "merge_events",
    "event_midpoint",
    "CollisionMonitor",
    "PositionTracker",
    "generate_body",
    "generate_bodies",
    "body_from_record",
    "parse_catalog",
    "load_catalog_json",
    "MIN_ORBIT_DISTANCE",
]

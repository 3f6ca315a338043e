from __future__ import annotations

"""Scene constants and default thresholds for the orbit engine.

Distances are in Earth radii (scene units), angles in radians and time in
simulation time units unless otherwise noted.
"""

import math

# --- Scene geometry ---
EARTH_RADIUS: float = 1.0
"""Radius of Earth in scene units."""

MIN_ORBIT_DISTANCE: float = EARTH_RADIUS * 1.5
"""Closest a body may be placed to Earth's center."""

MAX_ORBIT_RADIUS: float = EARTH_RADIUS * 10
"""Upper bound for synthetic orbit radii."""

# --- Synthetic generator ranges ---
SYNTHETIC_SPEED_MIN: float = 0.1
"""Smallest synthetic angular speed magnitude (rad per time unit)."""

SYNTHETIC_SPEED_MAX: float = 0.3
"""Largest synthetic angular speed magnitude (rad per time unit)."""

SYNTHETIC_ECCENTRICITY_MAX: float = 0.5
"""Upper bound for synthetic eccentricity."""

SYNTHETIC_INCLINATION_MAX: float = math.pi / 3
"""Upper bound for synthetic inclination in radians."""

DEBRIS_SIZE: float = 0.01
"""Fixed radius of synthetic debris."""

SYNTHETIC_SIZE_MIN: float = 0.02
"""Smallest radius of a synthetic satellite or asteroid."""

SYNTHETIC_SIZE_MAX: float = 0.07
"""Largest radius of a synthetic satellite or asteroid."""

DEFAULT_SYNTHETIC_COUNT: int = 70
"""Number of synthetic bodies generated per batch."""

# --- Catalog conversion ---
CATALOG_BODY_SIZE: float = 0.05
"""Radius assigned to every catalog body."""

CATALOG_SPEED_SCALE: float = 0.1
"""Angular speed of a body with a one-year orbital period."""

# --- Collision detection and prediction ---
DEFAULT_PREDICTION_STEPS: int = 10
"""Number of forward steps examined by the predictor."""

DEFAULT_PREDICTION_STEP: float = 1.0
"""Simulation time between predictor steps."""

DEFAULT_ALERT_LIMIT: int = 4
"""Number of merged collision alerts kept for display."""

DEFAULT_DETECTION_PERIOD: float = 1.0
"""Simulation time between collision monitor runs."""

KDTREE_MIN_BODIES: int = 200
"""Body count at which the monitor switches to the KD-tree pair search."""

# --- Presentation buffers ---
DEFAULT_TRAIL_LENGTH: int = 50
"""Number of recent positions kept per body for trail rendering."""

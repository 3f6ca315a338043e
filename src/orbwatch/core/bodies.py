"""Orbiting body records.

A :class:`Body` carries the parameters of the closed-form orbit model used by
:mod:`orbwatch.core.propagation`. Bodies are plain data: they are never
validated here, so malformed upstream values reach the propagator unchanged.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

logger = logging.getLogger(__name__)


class BodyCategory(Enum):
    """Kinds of tracked objects."""

    SATELLITE = "satellite"
    ASTEROID = "asteroid"
    DEBRIS = "debris"
    COMET = "comet"


@dataclass(frozen=True)
class Body:
    """One orbiting object.

    Attributes:
        id: Unique identifier.
        name: Display name.
        category: Kind of object.
        orbit_radius: Semi-major axis in Earth radii.
        eccentricity: Orbit eccentricity, 0 <= e < 1.
        inclination: Tilt of the orbital plane in radians.
        phase: Mean angle at the simulation epoch in radians.
        speed: Radians of mean angle per unit simulation time. Negative
            values orbit retrograde.
        size: Radius used for rendering and the collision threshold.
        raan: Right ascension of the ascending node in radians. Only used by
            the full-rotation propagation mode.
        arg_pericenter: Argument of pericenter in radians. Only used by the
            full-rotation propagation mode.
        perihelion_au: Catalog perihelion distance in AU (display only).
        aphelion_au: Catalog aphelion distance in AU (display only).
        orbital_period_yr: Catalog orbital period in years (display only).
    """

    id: str
    name: str
    category: BodyCategory
    orbit_radius: float
    eccentricity: float
    inclination: float
    phase: float
    speed: float
    size: float
    raan: float = 0.0
    arg_pericenter: float = 0.0
    perihelion_au: float | None = None
    aphelion_au: float | None = None
    orbital_period_yr: float | None = None

    @property
    def is_retrograde(self) -> bool:
        return self.speed < 0


def category_counts(bodies: Iterable[Body]) -> dict[BodyCategory, int]:
    """Count bodies per category.

    Args:
        bodies: Bodies to count.

    Returns:
        Mapping of category to count, in first-seen order. Categories with no
        bodies are omitted.
    """
    counts = Counter(body.category for body in bodies)
    logger.debug("category_counts: %d categories", len(counts))
    return dict(counts)

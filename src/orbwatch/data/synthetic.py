"""Synthetic body generation.

Every function takes an explicit :class:`numpy.random.Generator` (or a seed),
so a batch can be reproduced exactly.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from orbwatch.core.bodies import Body, BodyCategory
from orbwatch.utils.constants import (
    DEBRIS_SIZE,
    DEFAULT_SYNTHETIC_COUNT,
    MAX_ORBIT_RADIUS,
    MIN_ORBIT_DISTANCE,
    SYNTHETIC_ECCENTRICITY_MAX,
    SYNTHETIC_INCLINATION_MAX,
    SYNTHETIC_SIZE_MAX,
    SYNTHETIC_SIZE_MIN,
    SYNTHETIC_SPEED_MAX,
    SYNTHETIC_SPEED_MIN,
)

logger = logging.getLogger(__name__)

SYNTHETIC_CATEGORIES: tuple[BodyCategory, ...] = (
    BodyCategory.SATELLITE,
    BodyCategory.ASTEROID,
    BodyCategory.DEBRIS,
)

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_LENGTH = 9


def _random_id(rng: np.random.Generator) -> str:
    digits = rng.integers(0, len(_ID_ALPHABET), size=_ID_LENGTH)
    return "".join(_ID_ALPHABET[d] for d in digits)


def generate_body(category: BodyCategory, rng: np.random.Generator) -> Body:
    """Generate one body with uniformly random orbit parameters.

    Args:
        category: Kind of body to generate.
        rng: Random source.

    Returns:
        A new body. Debris gets a fixed small size; other kinds a random size.
    """
    orbit_radius = rng.uniform(MIN_ORBIT_DISTANCE, MAX_ORBIT_RADIUS)
    speed = rng.uniform(SYNTHETIC_SPEED_MIN, SYNTHETIC_SPEED_MAX)
    if rng.random() < 0.5:
        speed = -speed
    eccentricity = rng.uniform(0.0, SYNTHETIC_ECCENTRICITY_MAX)
    phase = rng.uniform(0.0, 2 * math.pi)
    inclination = rng.uniform(0.0, SYNTHETIC_INCLINATION_MAX)
    raan = rng.uniform(0.0, 2 * math.pi)
    arg_pericenter = rng.uniform(0.0, 2 * math.pi)

    if category is BodyCategory.DEBRIS:
        size = DEBRIS_SIZE
    else:
        size = rng.uniform(SYNTHETIC_SIZE_MIN, SYNTHETIC_SIZE_MAX)

    return Body(
        id=_random_id(rng),
        name=f"{category.value}-{int(rng.integers(0, 1000))}",
        category=category,
        orbit_radius=float(orbit_radius),
        eccentricity=float(eccentricity),
        inclination=float(inclination),
        phase=float(phase),
        speed=float(speed),
        size=float(size),
        raan=float(raan),
        arg_pericenter=float(arg_pericenter),
    )


def generate_bodies(
    count: int = DEFAULT_SYNTHETIC_COUNT,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    categories: Sequence[BodyCategory] = SYNTHETIC_CATEGORIES,
) -> list[Body]:
    """Generate a batch of synthetic bodies.

    Args:
        count: Number of bodies.
        seed: Seed for a fresh generator. Ignored when ``rng`` is given.
        rng: Random source to draw from.
        categories: Categories to pick from uniformly.

    Returns:
        List of ``count`` bodies.

    Raises:
        ValueError: If ``count`` is negative or ``categories`` is empty.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if not categories:
        raise ValueError("categories must not be empty")

    if rng is None:
        rng = np.random.default_rng(seed)

    bodies = []
    for _ in range(count):
        category = categories[int(rng.integers(0, len(categories)))]
        bodies.append(generate_body(category, rng))

    logger.debug("Generated %d synthetic bodies", len(bodies))
    return bodies

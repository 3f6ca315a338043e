"""Shared fixtures for the orbwatch test suite."""
from __future__ import annotations

import pytest

from orbwatch.core.bodies import Body, BodyCategory


def make_body(
    body_id: str,
    *,
    orbit_radius: float = 2.0,
    eccentricity: float = 0.0,
    inclination: float = 0.0,
    phase: float = 0.0,
    speed: float = 0.1,
    size: float = 0.5,
    category: BodyCategory = BodyCategory.SATELLITE,
    **kwargs,
) -> Body:
    """Build a body with simple defaults (circular, equatorial orbit at 2 Earth radii)."""
    return Body(
        id=body_id,
        name=f"{category.value}-{body_id}",
        category=category,
        orbit_radius=orbit_radius,
        eccentricity=eccentricity,
        inclination=inclination,
        phase=phase,
        speed=speed,
        size=size,
        **kwargs,
    )


@pytest.fixture
def prograde() -> Body:
    """Circular equatorial body moving prograde."""
    return make_body("pro", speed=0.1)


@pytest.fixture
def retrograde() -> Body:
    """Same orbit as ``prograde`` but moving the other way."""
    return make_body("retro", speed=-0.1)

"""Closed-form orbit propagation.

Positions come from a parametric ellipse evaluated at a mean angle that
advances linearly with simulation time. This is a visual approximation, not a
gravitational integrator.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from orbwatch.core.bodies import Body
from orbwatch.utils.constants import MIN_ORBIT_DISTANCE

logger = logging.getLogger(__name__)


class InclinationMode(Enum):
    """How the orbital plane is oriented in the scene."""

    TILT = "tilt"
    EULER = "euler"


def _elements(bodies: Sequence[Body]) -> NDArray[np.float64]:
    """Pack body parameters into an (n, 7) float array."""
    return np.array(
        [
            (b.orbit_radius, b.eccentricity, b.inclination, b.phase, b.speed,
             b.raan, b.arg_pericenter)
            for b in bodies
        ],
        dtype=np.float64,
    ).reshape(len(bodies), 7)


def propagate_batch(
    bodies: Sequence[Body],
    t: float,
    inclination_mode: InclinationMode = InclinationMode.TILT,
) -> NDArray[np.float64]:
    """Compute the positions of many bodies at one simulation time.

    Args:
        bodies: Bodies to propagate.
        t: Simulation time.
        inclination_mode: ``TILT`` applies the single-axis tilt of the x/z
            extent; ``EULER`` rotates the orbit by RAAN, inclination and
            argument of pericenter.

    Returns:
        Array of shape (n, 3) with one [x, y, z] row per body. Rows of bodies
        with NaN or infinite parameters contain NaN or infinite values.
    """
    if not bodies:
        return np.empty((0, 3), dtype=np.float64)

    el = _elements(bodies)
    radius, ecc, inc, phase, speed, raan, argp = el.T

    with np.errstate(invalid="ignore", divide="ignore", over="ignore"):
        angle = t * speed + phase
        # np.maximum keeps NaN radii as NaN
        a = np.maximum(radius, MIN_ORBIT_DISTANCE)
        b = a * np.sqrt(1.0 - ecc * ecc)
        x_orbit = a * np.cos(angle)
        y_orbit = b * np.sin(angle)

        if inclination_mode is InclinationMode.EULER:
            cos_o, sin_o = np.cos(raan), np.sin(raan)
            cos_w, sin_w = np.cos(argp), np.sin(argp)
            cos_i, sin_i = np.cos(inc), np.sin(inc)
            x = ((cos_o * cos_w - sin_o * sin_w * cos_i) * x_orbit
                 + (-cos_o * sin_w - sin_o * cos_w * cos_i) * y_orbit)
            y = ((sin_o * cos_w + cos_o * sin_w * cos_i) * x_orbit
                 + (-sin_o * sin_w + cos_o * cos_w * cos_i) * y_orbit)
            z = sin_w * sin_i * x_orbit + cos_w * sin_i * y_orbit
        else:
            x = x_orbit * np.cos(inc)
            y = y_orbit
            z = x_orbit * np.sin(inc)

        positions = np.column_stack((x, y, z))

        # Push anything inside the floor back out along its own direction
        distance = np.sqrt(np.sum(positions * positions, axis=1))
        too_close = distance < MIN_ORBIT_DISTANCE
        if np.any(too_close):
            positions[too_close] *= (MIN_ORBIT_DISTANCE / distance[too_close])[:, None]

    return positions


def position(
    body: Body,
    t: float,
    inclination_mode: InclinationMode = InclinationMode.TILT,
) -> NDArray[np.float64]:
    """Compute one body's position at simulation time ``t``.

    Pure and deterministic; never raises. Shares its arithmetic with
    :func:`propagate_batch`, so both return identical values.

    Args:
        body: Body to propagate.
        t: Simulation time.
        inclination_mode: Orbital plane orientation mode.

    Returns:
        Position [x, y, z] in Earth radii, shape (3,).
    """
    return propagate_batch([body], t, inclination_mode)[0]


def positions_by_id(
    bodies: Sequence[Body],
    t: float,
    inclination_mode: InclinationMode = InclinationMode.TILT,
) -> dict[str, NDArray[np.float64]]:
    """Propagate bodies and key the results by body id.

    Args:
        bodies: Bodies to propagate.
        t: Simulation time.
        inclination_mode: Orbital plane orientation mode.

    Returns:
        Mapping of body id to position.
    """
    positions = propagate_batch(bodies, t, inclination_mode)
    logger.debug("Propagated %d bodies to t=%s", len(bodies), t)
    return {body.id: positions[i] for i, body in enumerate(bodies)}

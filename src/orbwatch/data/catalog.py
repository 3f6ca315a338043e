"""Conversion of public comet/asteroid catalog records into bodies.

Records follow the NASA near-Earth comet orbital elements feed
(``data.nasa.gov`` resource ``b67r-rgxc``), where every numeric field arrives
as a string:

    object       designation, e.g. "P/2004 R1 (McNaught)"
    object_name  display name (optional)
    e            eccentricity
    i_deg        inclination in degrees
    w_deg        argument of perihelion in degrees (optional)
    node_deg     longitude of the ascending node in degrees (optional)
    q_au_1       perihelion distance in AU
    q_au_2       aphelion distance in AU
    p_yr         orbital period in years

Catalog distances are rescaled into the scene, not converted physically:
perihelion distance in AU becomes the orbit radius in Earth radii.
Fetching the feed is left to the caller.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Iterable, Mapping

import numpy as np

from orbwatch.core.bodies import Body, BodyCategory
from orbwatch.utils.constants import (
    CATALOG_BODY_SIZE,
    CATALOG_SPEED_SCALE,
    EARTH_RADIUS,
    MIN_ORBIT_DISTANCE,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("object", "e", "i_deg", "q_au_1", "q_au_2", "p_yr")


def _number(record: Mapping[str, Any], key: str) -> float:
    """Read a finite float field from a record."""
    raw = record.get(key)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.error("Catalog record %r: field %s is not a number: %r", record.get("object"), key, raw)
        raise ValueError(f"Catalog field {key!r} is not a number: {raw!r}") from None
    if not math.isfinite(value):
        logger.error("Catalog record %r: field %s is not finite", record.get("object"), key)
        raise ValueError(f"Catalog field {key!r} is not finite: {raw!r}")
    return value


def _optional_angle(record: Mapping[str, Any], key: str) -> float:
    if record.get(key) in (None, ""):
        return 0.0
    return math.radians(_number(record, key))


def body_from_record(record: Mapping[str, Any], rng: np.random.Generator) -> Body:
    """Convert one catalog record into a body.

    Args:
        record: Catalog record.
        rng: Random source for the initial phase, which the catalog does not
            carry.

    Returns:
        A catalog body with a fixed size and display-only catalog fields.

    Raises:
        ValueError: If a required field is missing, is not a finite number,
            or the eccentricity or period is out of range.
    """
    missing = [key for key in REQUIRED_FIELDS if record.get(key) in (None, "")]
    if missing:
        logger.error("Catalog record %r is missing fields %s", record.get("object"), missing)
        raise ValueError(f"Catalog record is missing fields: {', '.join(missing)}")

    designation = str(record["object"]).strip()
    eccentricity = _number(record, "e")
    inclination_deg = _number(record, "i_deg")
    perihelion = _number(record, "q_au_1")
    aphelion = _number(record, "q_au_2")
    period = _number(record, "p_yr")

    if not 0.0 <= eccentricity < 1.0:
        logger.error("Catalog record %r: eccentricity %s outside [0, 1)", designation, eccentricity)
        raise ValueError(f"Eccentricity must be in [0, 1), got {eccentricity}")
    if period <= 0:
        logger.error("Catalog record %r: non-positive period %s", designation, period)
        raise ValueError(f"Orbital period must be positive, got {period}")

    category = BodyCategory.COMET if designation.startswith("P/") else BodyCategory.ASTEROID
    name = str(record.get("object_name") or designation).strip()

    return Body(
        id=designation,
        name=name,
        category=category,
        orbit_radius=max(perihelion * EARTH_RADIUS, MIN_ORBIT_DISTANCE),
        eccentricity=eccentricity,
        inclination=math.radians(inclination_deg),
        phase=float(rng.uniform(0.0, 2 * math.pi)),
        speed=CATALOG_SPEED_SCALE / period,
        size=CATALOG_BODY_SIZE,
        raan=_optional_angle(record, "node_deg"),
        arg_pericenter=_optional_angle(record, "w_deg"),
        perihelion_au=perihelion,
        aphelion_au=aphelion,
        orbital_period_yr=period,
    )


def parse_catalog(
    records: Iterable[Mapping[str, Any]],
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    strict: bool = False,
) -> list[Body]:
    """Convert catalog records into bodies.

    Args:
        records: Catalog records.
        seed: Seed for a fresh generator. Ignored when ``rng`` is given.
        rng: Random source for initial phases.
        strict: Raise on the first invalid record instead of skipping it.

    Returns:
        Bodies for every valid record, in input order.

    Raises:
        ValueError: If ``strict`` and a record is invalid.
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    bodies: list[Body] = []
    skipped = 0
    for record in records:
        try:
            bodies.append(body_from_record(record, rng))
        except ValueError as exc:
            if strict:
                raise
            skipped += 1
            logger.warning("Skipping catalog record %r: %s", record.get("object"), exc)

    logger.debug("Parsed %d catalog bodies (%d skipped)", len(bodies), skipped)
    return bodies


def load_catalog_json(
    text: str,
    *,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    strict: bool = False,
) -> list[Body]:
    """Parse a JSON array of catalog records into bodies.

    Raises:
        ValueError: If ``text`` is not a JSON array of objects, or if
            ``strict`` and a record is invalid.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error("Catalog payload is not valid JSON: %s", exc)
        raise ValueError(f"Catalog payload is not valid JSON: {exc}") from exc

    if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
        logger.error("Catalog payload is not a JSON array of objects")
        raise ValueError("Catalog payload must be a JSON array of objects")

    return parse_catalog(payload, seed=seed, rng=rng, strict=strict)

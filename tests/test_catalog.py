"""Tests for catalog record conversion."""
from __future__ import annotations

import json
import logging
import math

import numpy as np
import pytest

from orbwatch.core.bodies import BodyCategory
from orbwatch.data.catalog import body_from_record, load_catalog_json, parse_catalog
from orbwatch.utils.constants import CATALOG_BODY_SIZE, MIN_ORBIT_DISTANCE

# Shaped like rows of the NASA near-Earth comet feed (all values are strings)
MCNAUGHT = {
    "object": "P/2004 R1 (McNaught)",
    "object_name": "McNaught",
    "e": "0.682",
    "i_deg": "4.894",
    "w_deg": "0.626",
    "node_deg": "296",
    "q_au_1": "0.986",
    "q_au_2": "5.23",
    "p_yr": "5.48",
}

FAR_ASTEROID = {
    "object": "C/2012 S1",
    "e": "0.45",
    "i_deg": "62.4",
    "q_au_1": "2.1",
    "q_au_2": "5.6",
    "p_yr": "8.1",
}


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)


def test_comet_record(rng):
    body = body_from_record(MCNAUGHT, rng)
    assert body.id == "P/2004 R1 (McNaught)"
    assert body.name == "McNaught"
    assert body.category is BodyCategory.COMET
    assert body.eccentricity == pytest.approx(0.682)
    assert body.inclination == pytest.approx(math.radians(4.894))
    assert body.arg_pericenter == pytest.approx(math.radians(0.626))
    assert body.raan == pytest.approx(math.radians(296))
    assert body.speed == pytest.approx(0.1 / 5.48)
    assert body.size == CATALOG_BODY_SIZE
    assert 0.0 <= body.phase < 2 * math.pi


def test_display_fields(rng):
    body = body_from_record(MCNAUGHT, rng)
    assert body.perihelion_au == pytest.approx(0.986)
    assert body.aphelion_au == pytest.approx(5.23)
    assert body.orbital_period_yr == pytest.approx(5.48)


def test_small_perihelion_is_lifted_to_floor(rng):
    assert body_from_record(MCNAUGHT, rng).orbit_radius == MIN_ORBIT_DISTANCE


def test_asteroid_record(rng):
    body = body_from_record(FAR_ASTEROID, rng)
    assert body.category is BodyCategory.ASTEROID
    assert body.name == "C/2012 S1"
    assert body.orbit_radius == pytest.approx(2.1)
    assert body.raan == 0.0
    assert body.arg_pericenter == 0.0


@pytest.mark.parametrize("field", ["object", "e", "i_deg", "q_au_1", "q_au_2", "p_yr"])
def test_missing_field_raises(rng, field: str):
    record = dict(FAR_ASTEROID)
    del record[field]
    with pytest.raises(ValueError, match="missing"):
        body_from_record(record, rng)


@pytest.mark.parametrize(
    "field, value",
    [("e", "abc"), ("i_deg", "nan"), ("q_au_1", "inf"), ("p_yr", "0"), ("e", "1.2")],
)
def test_bad_values_raise(rng, field: str, value: str):
    record = dict(FAR_ASTEROID, **{field: value})
    with pytest.raises(ValueError):
        body_from_record(record, rng)


class TestParseCatalog:
    def test_converts_in_order(self):
        bodies = parse_catalog([MCNAUGHT, FAR_ASTEROID], seed=3)
        assert [b.id for b in bodies] == ["P/2004 R1 (McNaught)", "C/2012 S1"]

    def test_reproducible_phases(self):
        first = parse_catalog([MCNAUGHT, FAR_ASTEROID], seed=8)
        second = parse_catalog([MCNAUGHT, FAR_ASTEROID], seed=8)
        assert [b.phase for b in first] == [b.phase for b in second]

    def test_skips_invalid_records(self, caplog):
        broken = dict(FAR_ASTEROID, object="BROKEN", e="")
        with caplog.at_level(logging.WARNING, logger="orbwatch.data.catalog"):
            bodies = parse_catalog([broken, MCNAUGHT], seed=1)
        assert [b.id for b in bodies] == ["P/2004 R1 (McNaught)"]
        assert "BROKEN" in caplog.text

    def test_strict_raises(self):
        broken = dict(FAR_ASTEROID, p_yr="-3")
        with pytest.raises(ValueError, match="period"):
            parse_catalog([MCNAUGHT, broken], seed=1, strict=True)

    def test_empty(self):
        assert parse_catalog([]) == []


class TestLoadCatalogJson:
    def test_loads_array(self):
        bodies = load_catalog_json(json.dumps([MCNAUGHT, FAR_ASTEROID]), seed=0)
        assert len(bodies) == 2

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="JSON"):
            load_catalog_json("{not json")

    def test_not_an_array(self):
        with pytest.raises(ValueError, match="array"):
            load_catalog_json(json.dumps({"object": "x"}))

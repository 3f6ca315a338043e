"""Tests for synthetic body generation."""
from __future__ import annotations

import math
import re

import numpy as np
import pytest

from orbwatch.core.bodies import BodyCategory, category_counts
from orbwatch.data.synthetic import SYNTHETIC_CATEGORIES, generate_bodies, generate_body
from orbwatch.utils.constants import (
    DEBRIS_SIZE,
    DEFAULT_SYNTHETIC_COUNT,
    MAX_ORBIT_RADIUS,
    MIN_ORBIT_DISTANCE,
)


@pytest.fixture
def batch():
    return generate_bodies(300, seed=42)


def test_default_count():
    assert len(generate_bodies(seed=0)) == DEFAULT_SYNTHETIC_COUNT


def test_reproducible_from_seed():
    assert generate_bodies(20, seed=123) == generate_bodies(20, seed=123)


def test_different_seeds_differ():
    assert generate_bodies(20, seed=1) != generate_bodies(20, seed=2)


def test_explicit_generator_is_used():
    first = generate_bodies(5, rng=np.random.default_rng(9))
    second = generate_bodies(5, rng=np.random.default_rng(9))
    assert first == second


def test_parameter_ranges(batch):
    for body in batch:
        assert MIN_ORBIT_DISTANCE <= body.orbit_radius <= MAX_ORBIT_RADIUS
        assert 0.1 <= abs(body.speed) <= 0.3
        assert 0.0 <= body.eccentricity <= 0.5
        assert 0.0 <= body.inclination <= math.pi / 3
        assert 0.0 <= body.phase < 2 * math.pi
        assert body.category in SYNTHETIC_CATEGORIES


def test_both_directions_occur(batch):
    assert any(b.is_retrograde for b in batch)
    assert any(not b.is_retrograde for b in batch)


def test_sizes_depend_on_category(batch):
    for body in batch:
        if body.category is BodyCategory.DEBRIS:
            assert body.size == DEBRIS_SIZE
        else:
            assert 0.02 <= body.size <= 0.07


def test_identity_format(batch):
    for body in batch:
        assert re.fullmatch(r"[0-9a-z]{9}", body.id)
        assert re.fullmatch(rf"{body.category.value}-\d{{1,3}}", body.name)


def test_no_comets_by_default(batch):
    counts = category_counts(batch)
    assert BodyCategory.COMET not in counts
    assert sum(counts.values()) == 300


def test_restricted_categories():
    bodies = generate_bodies(10, seed=4, categories=[BodyCategory.DEBRIS])
    assert category_counts(bodies) == {BodyCategory.DEBRIS: 10}


def test_generate_body():
    body = generate_body(BodyCategory.SATELLITE, np.random.default_rng(0))
    assert body.category is BodyCategory.SATELLITE
    assert body.perihelion_au is None


def test_zero_count():
    assert generate_bodies(0, seed=1) == []


def test_negative_count_raises():
    with pytest.raises(ValueError, match="non-negative"):
        generate_bodies(-1)


def test_empty_categories_raises():
    with pytest.raises(ValueError):
        generate_bodies(3, categories=[])

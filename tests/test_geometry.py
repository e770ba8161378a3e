import math
import random

import numpy as np
import pytest

from guardiao.config import DEFAULT_CENTER, DEFAULT_ZOOM, TERRITORY_ZOOM
from guardiao.model.geometry import (
    Envelope, GeoPoint, ViewportState, compute_viewport, is_valid_coordinate, ring_to_xy,
    validate_ring,
)


class TestValidateRing:
    def test_drops_malformed_and_swaps_axes(self):
        assert validate_ring([[math.nan, 1], [2, 3], ["x", 4]]) == [GeoPoint(lat=3.0, lng=2.0)]

    def test_preserves_order(self):
        ring = [[1, 2], [3, 4], [5, 6]]
        assert validate_ring(ring) == [GeoPoint(2, 1), GeoPoint(4, 3), GeoPoint(6, 5)]

    @pytest.mark.parametrize("raw", [None, "12", 42, []])
    def test_non_ring_input_is_empty(self, raw):
        assert validate_ring(raw) == []

    @pytest.mark.parametrize("coord", [
        [1], [1, 2, 3], "ab", {"a": 1, "b": 2}, [True, 1], [1, None],
        [math.inf, 0], [0, -math.inf], ["1", "2"], [10 ** 400, 1], [1, -(10 ** 400)],
    ])
    def test_rejects(self, coord):
        assert not is_valid_coordinate(coord)
        assert validate_ring([coord]) == []

    def test_accepts_tuples_and_ints(self):
        assert is_valid_coordinate((1, 2.5))
        assert validate_ring([(-55, -3)]) == [GeoPoint(lat=-3.0, lng=-55.0)]

    def test_huge_integer_is_dropped_not_raised(self):
        assert validate_ring([[10 ** 400, 1], [2, 3]]) == [GeoPoint(lat=3.0, lng=2.0)]

    def test_generated_rings_only_yield_finite_points(self):
        rng = random.Random(1234)
        junk = [math.nan, math.inf, -math.inf, None, "x", True, 10 ** 400, [], {}]

        def value():
            return rng.choice(junk) if rng.random() < 0.3 else rng.uniform(-180, 180)

        for _ in range(200):
            ring = []
            for _ in range(rng.randint(0, 12)):
                coord = [value() for _ in range(rng.choice([1, 2, 2, 2, 3]))]
                ring.append(tuple(coord) if rng.random() < 0.2 else coord)
            points = validate_ring(ring)
            assert len(points) <= len(ring)
            assert all(math.isfinite(p.lat) and math.isfinite(p.lng) for p in points)

    def test_idempotent_on_valid_output(self):
        first = validate_ring([[1, 2], ["bad"], [3, 4]])
        again = validate_ring([[p.lng, p.lat] for p in first])
        assert again == first


class TestBounds:
    def test_empty_envelope(self):
        assert Envelope.from_points([]) is None

    def test_envelope_and_center(self):
        env = Envelope.from_points([GeoPoint(0, 0), GeoPoint(10, 4), GeoPoint(-2, 6)])
        assert env == Envelope(min_lat=-2.0, max_lat=10.0, min_lng=0.0, max_lng=6.0)
        assert env.center == GeoPoint(lat=4.0, lng=3.0)

    def test_compute_viewport_empty(self):
        assert compute_viewport([]) is None

    def test_compute_viewport_centers_with_fixed_zoom(self):
        points = [GeoPoint(0, 0), GeoPoint(0, 10), GeoPoint(10, 10), GeoPoint(10, 0)]
        viewport = compute_viewport(points)
        assert viewport == ViewportState(center=GeoPoint(5.0, 5.0), zoom_level=TERRITORY_ZOOM)

    def test_single_point(self):
        viewport = compute_viewport([GeoPoint(-3.0, -55.0)])
        assert viewport.center == GeoPoint(-3.0, -55.0)

    def test_default_viewport(self):
        viewport = ViewportState.default()
        assert (viewport.center.lat, viewport.center.lng) == DEFAULT_CENTER
        assert viewport.zoom_level == DEFAULT_ZOOM


def test_ring_to_xy_closes_ring():
    xy = ring_to_xy([GeoPoint(0, 1), GeoPoint(2, 3), GeoPoint(4, 5)])
    assert xy.shape == (4, 2)
    np.testing.assert_allclose(xy[0], [1, 0])
    np.testing.assert_allclose(xy[-1], xy[0])


def test_ring_to_xy_empty():
    assert ring_to_xy([]).shape == (0, 2)

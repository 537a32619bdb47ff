"""Tests for the parametric coordinate generators."""

import logging
import math

import pytest

from orbitlab.coordinates import (
    Coordinate,
    SegmentRounding,
    circle_orbit,
    polygon_orbit,
    polygon_vertices,
    rotate_phase,
    segment_length,
    square_orbit,
)
from orbitlab.error_handling import ConfigurationError


def _close(a: Coordinate, b: Coordinate, tol: float = 1e-9) -> bool:
    return math.isclose(a.x, b.x, abs_tol=tol) and math.isclose(a.y, b.y, abs_tol=tol)


class TestRotatePhase:
    """Cyclic rotation of generated sequences."""

    def test_rotation_definition(self):
        """rotated[i] == seq[(i + phase) % n]."""
        seq = [Coordinate(float(i), 0.0) for i in range(10)]
        rotated = rotate_phase(seq, 3)
        for i in range(10):
            assert rotated[i] == seq[(i + 3) % 10]

    @pytest.mark.parametrize("k", [0, 1, 7, 119])
    def test_round_trip(self, center, k):
        """Rotating by k then by n - k gives the original sequence."""
        orbit = circle_orbit(center, 50, 120)
        assert rotate_phase(rotate_phase(orbit, k), 120 - k) == orbit

    def test_negative_and_oversized_phase(self):
        """Phases wrap modulo the sequence length in both directions."""
        seq = [Coordinate(float(i), 0.0) for i in range(5)]
        assert rotate_phase(seq, -1)[0] == seq[4]
        assert rotate_phase(seq, 12) == rotate_phase(seq, 2)

    def test_empty_sequence(self):
        assert rotate_phase([], 3) == ()


class TestCircleOrbit:
    """Circular orbits."""

    def test_length_and_start(self, center):
        """One point per step, starting straight above the centre."""
        orbit = circle_orbit(center, 50, 120)
        assert len(orbit) == 120
        assert _close(orbit[0], Coordinate(120.0, 70.0))

    def test_points_on_circle(self, center):
        for point in circle_orbit(center, 50, 120):
            assert math.isclose(math.hypot(point.x - 120, point.y - 120), 50)

    def test_periodicity(self, center):
        """Step i and step (i + n) mod n address the same point, and the orbit closes."""
        orbit = circle_orbit(center, 50, 120)
        for i in range(120):
            assert orbit[i] == orbit[(i + 120) % 120]
        # the step after the last lies where step 0 does
        last = orbit[-1]
        assert math.hypot(last.x - orbit[0].x, last.y - orbit[0].y) < 2 * math.pi * 50 / 120 + 1e-9

    def test_phase_matches_rotation(self, center):
        assert circle_orbit(center, 50, 120, phase=30) == rotate_phase(
            circle_orbit(center, 50, 120), 30
        )

    def test_speed_two_laps(self, center):
        """Speed 2 reaches the start again halfway through the period."""
        orbit = circle_orbit(center, 50, 120, speed=2)
        assert _close(orbit[60], orbit[0])

    @pytest.mark.parametrize("kwargs", [{"speed": 1.5}, {"speed": 0}, {"radius": -1}, {"total_steps": 0}])
    def test_invalid_parameters(self, center, kwargs):
        params = {"radius": 50, "total_steps": 120, **kwargs}
        with pytest.raises(ConfigurationError):
            circle_orbit(center, **params)


class TestPolygonOrbit:
    """Polygon and star-polygon orbits."""

    def test_vertices_evenly_spaced(self, center):
        vertices = polygon_vertices(center, 100, 7)
        assert _close(vertices[0], Coordinate(120.0, 20.0))
        for a, b in zip(vertices, vertices[1:] + vertices[:1]):
            assert math.isclose(
                math.hypot(a.x - b.x, a.y - b.y), 2 * 100 * math.sin(math.pi / 7)
            )

    def test_square_segments(self, center):
        """A square orbit hits its corners every quarter period."""
        orbit = square_orbit(center, 50, 120)
        corners = polygon_vertices(center, 50, 4, rotation=math.pi / 4)
        for k in range(4):
            assert _close(orbit[30 * k], corners[k])
        # halfway along the first edge
        assert _close(orbit[15], corners[0].lerp(corners[1], 0.5))

    def test_square_is_axis_aligned(self, center):
        corners = polygon_vertices(center, 50, 4, rotation=math.pi / 4)
        xs = sorted(round(c.x, 9) for c in corners)
        ys = sorted(round(c.y, 9) for c in corners)
        assert xs[0] == xs[1] and xs[2] == xs[3]
        assert ys[0] == ys[1] and ys[2] == ys[3]
        assert math.isclose(xs[2] - xs[0], 50 * math.sqrt(2))

    def test_heptagram_scenario(self, center):
        """7 vertices, stride 3, 120 steps: 120 points that visit every vertex."""
        vertices = polygon_vertices(center, 100, 7)
        orbits = [
            polygon_orbit(center, 100, 7, 120, stride=3, phase=k * 10) for k in range(12)
        ]
        seg = segment_length(120, 7)
        assert seg == 17

        for orbit in orbits:
            assert len(orbit) == 120

        base = orbits[0]
        visited = [base[k * seg] for k in range(7)]
        # star order: 0 -> 3 -> 6 -> 2 -> 5 -> 1 -> 4
        assert [vertices.index(v) for v in visited] == [0, 3, 6, 2, 5, 1, 4]
        # after one full cycle of segments the walk is back at the first vertex
        assert _close(base[7 * seg], base[0])

    def test_phase_offsets_are_rotations(self, center):
        base = polygon_orbit(center, 100, 7, 120, stride=3)
        shifted = polygon_orbit(center, 100, 7, 120, stride=3, phase=40)
        assert shifted == rotate_phase(base, 40)

    def test_truncation_warns(self, center, caplog):
        with caplog.at_level(logging.WARNING, logger="orbitlab.coordinates"):
            polygon_orbit(center, 100, 7, 120, stride=3)
        assert "desynchronised" in caplog.text

    def test_strict_rounding_rejects_uneven_split(self, center):
        with pytest.raises(ConfigurationError):
            polygon_orbit(center, 100, 7, 120, stride=3, rounding=SegmentRounding.STRICT)

    def test_strict_rounding_accepts_even_split(self, center):
        orbit = polygon_orbit(center, 50, 4, 120, rounding=SegmentRounding.STRICT)
        assert len(orbit) == 120

    def test_too_few_steps(self, center):
        with pytest.raises(ConfigurationError):
            polygon_orbit(center, 100, 7, 6)

    @pytest.mark.parametrize("kwargs", [{"stride": 0}, {"vertex_count": 1}, {"speed": -1}])
    def test_invalid_parameters(self, center, kwargs):
        params = {"radius": 100, "vertex_count": 7, "total_steps": 140, **kwargs}
        with pytest.raises(ConfigurationError):
            polygon_orbit(center, **params)

    def test_speed_shortens_segments(self):
        assert segment_length(120, 4, speed=2) == 15

import pytest

from orbitlab.coordinates import Coordinate
from orbitlab.palette import Color
from orbitlab.patterns import Pattern
from orbitlab.shapes import Circle

# ---------------------------------------------------------------------------
# Session-wide fixtures / helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def center():
    """Centre of the default 240x240 frame."""
    return Coordinate(120.0, 120.0)


@pytest.fixture
def disc_pattern(center):
    """A black disc of radius 50 at the frame centre for all 120 steps."""
    return Pattern.from_shapes_per_step(
        lambda step: [Circle(center, 50, Color.BLACK)], total_steps=120
    )


def _solid_pattern(color: int, total_steps: int = 4, radius: float = 1000.0) -> Pattern:
    return Pattern.from_shapes_per_step(
        lambda step: [Circle(Coordinate(0.0, 0.0), radius, color)], total_steps
    )


@pytest.fixture
def solid_pattern():
    """Factory for patterns whose single shape covers every pixel of a small frame."""
    return _solid_pattern

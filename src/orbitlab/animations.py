"""Compiled-in animations.

Each animation is a builder turning the frame geometry in a
``RenderConfig`` into a pattern; all motion parameters (radii, speeds,
phases, colors, rotation directions) are fixed here.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from .config import DEFAULT_RENDER_CONFIG, RenderConfig
from .coordinates import Coordinate, circle_orbit, polygon_orbit, square_orbit
from .error_handling import ConfigurationError
from .palette import Color
from .patterns import CompositePattern, Pattern, PaintOrder, PatternEvaluator
from .shapes import Circle, Cross, EqualArmedCross, LineSegment

DOT_RADIUS = 3.0


@dataclass(frozen=True)
class AnimationSpec:
    """A named, compiled-in animation."""

    name: str
    description: str
    builder: Callable[[RenderConfig], PatternEvaluator]

    def build(self, config: RenderConfig = DEFAULT_RENDER_CONFIG) -> PatternEvaluator:
        return self.builder(config)


def _center(config: RenderConfig) -> Coordinate:
    return Coordinate(*config.center)


def rotating_circle(config: RenderConfig) -> Pattern:
    """A single dot circling the frame centre."""
    orbit = circle_orbit(_center(config), radius=50, total_steps=config.TOTAL_STEPS)
    return Pattern.from_shapes_per_step(
        lambda step: [Circle(orbit[step], DOT_RADIUS)], config.TOTAL_STEPS
    )


def rotating_squares(config: RenderConfig) -> Pattern:
    """Four dots chasing each other around a square."""
    orbits = [
        square_orbit(_center(config), radius=50, total_steps=config.TOTAL_STEPS, phase=25 * k)
        for k in range(4)
    ]
    return Pattern.from_shapes_per_step(
        lambda step: [Circle(orbit[step], DOT_RADIUS) for orbit in orbits],
        config.TOTAL_STEPS,
    )


def rotating_heptagram(config: RenderConfig) -> Pattern:
    """Twelve dots tracing a heptagram, linked by two families of chords.

    Dot ``k`` is joined to dot ``k+3`` in blue and to dot ``k+4`` in green.
    Dots come first in every step so they stay on top of the chords.
    """
    count = 12
    steps = config.TOTAL_STEPS
    orbits = [
        polygon_orbit(
            _center(config),
            radius=100,
            vertex_count=7,
            total_steps=steps,
            stride=3,
            phase=k * (steps // count),
        )
        for k in range(count)
    ]

    def shapes(step: int) -> list:
        points = [orbit[step] for orbit in orbits]
        dots = [Circle(p, DOT_RADIUS) for p in points]
        blue = [LineSegment(points[k], points[(k + 3) % count], Color.BLUE) for k in range(count)]
        green = [LineSegment(points[k], points[(k + 4) % count], Color.GREEN) for k in range(count)]
        return dots + blue + green

    return Pattern.from_shapes_per_step(shapes, steps, paint_order=PaintOrder.FIRST)


def orbits(config: RenderConfig) -> CompositePattern:
    """The square dots with the circling dot layered on top."""
    return CompositePattern([rotating_squares(config), rotating_circle(config)])


def single_cross(config: RenderConfig) -> Pattern:
    """A static black plus sign in the middle of the frame.

    Nothing moves, so the period is a single step whatever the configured
    step count.
    """
    cross = Cross(_center(config), half_width=15, half_height=15, half_thickness=5, color=Color.BLACK)
    return Pattern.from_shapes_per_step(lambda step: [cross], 1)


def rotating_crosses(config: RenderConfig) -> CompositePattern:
    """A grid of X shapes turning like meshed gears.

    Neighbouring cells turn a full turn per period in opposite directions,
    so at the default 120 steps the arm tips move more than a pixel per step. The
    two directions are drawn as separate layers, blue over red.
    """
    spacing = 48.0
    arm_length = 22.0
    half_thickness = 5.0
    steps = config.TOTAL_STEPS

    columns = max(1, int(config.WIDTH // spacing))
    rows = max(1, int(config.HEIGHT // spacing))
    cells = [
        (Coordinate(spacing / 2 + i * spacing, spacing / 2 + j * spacing), 1 if (i + j) % 2 == 0 else -1)
        for j in range(rows)
        for i in range(columns)
    ]

    def layer(direction: int, color: Color) -> Pattern:
        centers = [c for c, d in cells if d == direction]

        def shapes(step: int) -> list:
            angle = math.pi / 4 + direction * 2 * math.pi * step / steps
            return [EqualArmedCross(c, arm_length, half_thickness, angle, color) for c in centers]

        return Pattern.from_shapes_per_step(shapes, steps)

    return CompositePattern([layer(1, Color.RED), layer(-1, Color.BLUE)])


ANIMATIONS: dict[str, AnimationSpec] = {
    spec.name: spec
    for spec in (
        AnimationSpec("rotating_circle", "One dot orbiting the centre", rotating_circle),
        AnimationSpec("rotating_squares", "Four dots walking a square", rotating_squares),
        AnimationSpec(
            "rotating_heptagram", "Twelve dots on a heptagram joined by chords", rotating_heptagram
        ),
        AnimationSpec("orbits", "Square dots under a circling dot", orbits),
        AnimationSpec("single_cross", "Static axis-aligned cross", single_cross),
        AnimationSpec("rotating_crosses", "Grid of counter-rotating X shapes", rotating_crosses),
    )
}


def get_animation(name: str) -> AnimationSpec:
    """Look up a compiled-in animation by name."""
    try:
        return ANIMATIONS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown animation '{name}'. Available: {', '.join(sorted(ANIMATIONS))}"
        ) from None

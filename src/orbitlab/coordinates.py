"""Parametric coordinate generators.

Every generator returns an orbit: a tuple with exactly one ``Coordinate`` per
animation step. Orbits are cyclic, so indexing with ``step % total_steps``
always yields a valid position, and phase offsets are applied as a cyclic
rotation of the finished sequence.

Angles follow the screen convention used throughout the package: angle 0 is
straight up from the centre and positive angles move counter-clockwise on
screen (``x = cx - r·sin θ``, ``y = cy - r·cos θ``).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .error_handling import ConfigurationError, log_warning_with_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """A point in pixel space."""

    x: float
    y: float

    def lerp(self, other: Coordinate, fraction: float) -> Coordinate:
        """Point ``fraction`` of the way from ``self`` to ``other``."""
        return Coordinate(
            self.x + fraction * (other.x - self.x),
            self.y + fraction * (other.y - self.y),
        )


Orbit = tuple[Coordinate, ...]


class SegmentRounding(Enum):
    """How polygon orbits treat a non-integral segment length."""

    # Truncate and accept a slightly desynchronised final segment
    TRUNCATE = "truncate"
    # Refuse the parameters
    STRICT = "strict"


def _check_orbit_params(radius: float, total_steps: int, speed: float) -> None:
    if total_steps < 1:
        raise ConfigurationError(f"total_steps must be at least 1, got {total_steps}")
    if radius < 0:
        raise ConfigurationError(f"radius must be non-negative, got {radius}")
    if speed <= 0:
        raise ConfigurationError(f"speed must be positive, got {speed}")


def rotate_phase(sequence: Sequence[Coordinate], phase: int) -> Orbit:
    """Cyclically rotate an orbit so that ``rotated[i] == sequence[(i + phase) % n]``.

    Negative phases rotate the other way; rotating by ``k`` and then by
    ``n - k`` gives back the original sequence.
    """
    n = len(sequence)
    if n == 0:
        return ()
    shift = phase % n
    return tuple(sequence[shift:]) + tuple(sequence[:shift])


def circle_orbit(
    center: Coordinate,
    radius: float,
    total_steps: int,
    speed: int = 1,
    phase: int = 0,
) -> Orbit:
    """Points evenly spaced in time around a circle.

    Args:
        center: Centre of the orbit
        radius: Orbit radius in pixels
        total_steps: Number of steps in one period
        speed: Laps per period; must be a whole number so the orbit closes
        phase: Cyclic step offset applied to the finished sequence

    Returns:
        One coordinate per step
    """
    _check_orbit_params(radius, total_steps, speed)
    if not float(speed).is_integer():
        raise ConfigurationError(
            f"circle orbit speed must be a whole number of laps per period, got {speed}"
        )

    coords = []
    for i in range(total_steps):
        theta = 2.0 * math.pi * speed * i / total_steps
        coords.append(
            Coordinate(center.x - radius * math.sin(theta), center.y - radius * math.cos(theta))
        )
    return rotate_phase(coords, phase)


def polygon_vertices(
    center: Coordinate, radius: float, vertex_count: int, rotation: float = 0.0
) -> list[Coordinate]:
    """Vertices of a regular polygon inscribed in a circle of ``radius``."""
    if vertex_count < 2:
        raise ConfigurationError(f"A polygon needs at least 2 vertices, got {vertex_count}")

    step_angle = 2.0 * math.pi / vertex_count
    return [
        Coordinate(
            center.x - radius * math.sin(rotation + k * step_angle),
            center.y - radius * math.cos(rotation + k * step_angle),
        )
        for k in range(vertex_count)
    ]


def segment_length(
    total_steps: int,
    vertex_count: int,
    speed: float = 1,
    rounding: SegmentRounding = SegmentRounding.TRUNCATE,
) -> int:
    """Steps spent travelling along each polygon edge.

    ``total_steps / vertex_count / speed`` is truncated when it is not whole.
    The steps left over at the end of the period then run into the start of
    the next edge, which slightly desynchronises the final segment.

    Raises:
        ConfigurationError: if the length is below one step, or if it is not
            whole and ``rounding`` is ``STRICT``.
    """
    exact = total_steps / vertex_count / speed
    length = int(exact)

    if length < 1:
        raise ConfigurationError(
            f"{total_steps} steps cannot be split into {vertex_count} segments at speed {speed}",
            context={"segment_length": exact},
        )

    if length != exact:
        if rounding is SegmentRounding.STRICT:
            raise ConfigurationError(
                f"{total_steps} steps do not divide evenly into {vertex_count} segments "
                f"at speed {speed}",
                context={"segment_length": exact},
            )
        log_warning_with_context(
            "Truncating non-integral segment length; last segment will be desynchronised",
            context={
                "total_steps": total_steps,
                "vertex_count": vertex_count,
                "speed": speed,
                "segment_length": length,
                "leftover_steps": total_steps - int(round(length * vertex_count * speed)),
            },
            logger=logger,
        )

    return length


def polygon_orbit(
    center: Coordinate,
    radius: float,
    vertex_count: int,
    total_steps: int,
    speed: float = 1,
    phase: int = 0,
    stride: int = 1,
    rotation: float = 0.0,
    rounding: SegmentRounding = SegmentRounding.TRUNCATE,
) -> Orbit:
    """A point walking the edges of a regular (star) polygon.

    The period is split into equal segments; during segment ``k`` the point
    moves linearly from vertex ``k·stride`` to vertex ``(k+1)·stride``
    (both modulo ``vertex_count``). A stride of 1 traces the polygon outline,
    a larger stride traces a star polygon, e.g. 7 vertices with stride 3 is a
    heptagram.

    Args:
        center: Centre of the circumscribed circle
        radius: Circumradius in pixels
        vertex_count: Number of polygon vertices
        total_steps: Number of steps in one period
        speed: Laps per period
        phase: Cyclic step offset applied to the finished sequence
        stride: Vertex skip between consecutive targets
        rotation: Angle of the first vertex (radians)
        rounding: Policy for non-integral segment lengths

    Returns:
        One coordinate per step
    """
    _check_orbit_params(radius, total_steps, speed)
    if stride < 1:
        raise ConfigurationError(f"stride must be at least 1, got {stride}")

    vertices = polygon_vertices(center, radius, vertex_count, rotation)
    seg_len = segment_length(total_steps, vertex_count, speed, rounding)

    coords = []
    for i in range(total_steps):
        segment, offset = divmod(i, seg_len)
        start = vertices[(segment * stride) % vertex_count]
        end = vertices[((segment + 1) * stride) % vertex_count]
        coords.append(start.lerp(end, offset / seg_len))

    return rotate_phase(coords, phase)


def square_orbit(
    center: Coordinate,
    radius: float,
    total_steps: int,
    speed: float = 1,
    phase: int = 0,
    rounding: SegmentRounding = SegmentRounding.TRUNCATE,
) -> Orbit:
    """Axis-aligned square orbit inscribed in a circle of ``radius``."""
    return polygon_orbit(
        center,
        radius,
        vertex_count=4,
        total_steps=total_steps,
        speed=speed,
        phase=phase,
        rotation=math.pi / 4,
        rounding=rounding,
    )

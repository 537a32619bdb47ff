"""Per-step shape patterns and their composition.

A ``Pattern`` holds one set of shapes per animation step. A
``CompositePattern`` layers patterns on top of each other, later children
painting over earlier ones. Both satisfy ``PatternEvaluator``, so composites
nest freely.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Protocol, runtime_checkable

import numpy as np

from .error_handling import ConfigurationError, StepOutOfRangeError
from .palette import Color
from .shapes import HitResult, Shape


class PaintOrder(Enum):
    """Which covering shape supplies the color within one step."""

    FIRST = "first"
    LAST = "last"


@runtime_checkable
class PatternEvaluator(Protocol):
    """Anything that can color a pixel at a given step."""

    @property
    def total_steps(self) -> int: ...

    def evaluate(self, step: int, x: float, y: float) -> HitResult: ...

    def evaluate_grid(
        self, step: int, xs: np.ndarray, ys: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]: ...


def _check_step(step: int, total_steps: int) -> None:
    if not isinstance(step, (int, np.integer)) or not 0 <= step < total_steps:
        raise StepOutOfRangeError(
            f"Step {step!r} is not an integer in [0, {total_steps})",
            context={"step": step, "total_steps": total_steps},
        )


class Pattern:
    """One shape set per step.

    Args:
        steps: Shape sets indexed by step
        paint_order: Whether the first or last covering shape wins
        background: Color reported for uncovered pixels
        total_steps: Expected period; a mismatch with ``len(steps)`` is an error
    """

    def __init__(
        self,
        steps: Sequence[Iterable[Shape]],
        paint_order: PaintOrder = PaintOrder.FIRST,
        background: int = Color.WHITE,
        total_steps: int | None = None,
    ):
        if len(steps) == 0:
            raise ConfigurationError("A pattern needs at least one step")
        if total_steps is not None and len(steps) != total_steps:
            raise ConfigurationError(
                f"Pattern has {len(steps)} steps, expected {total_steps}",
                context={"steps": len(steps), "total_steps": total_steps},
            )

        self._steps: tuple[tuple[Shape, ...], ...] = tuple(tuple(s) for s in steps)
        self.paint_order = paint_order
        self.background = int(background)

    @classmethod
    def from_shapes_per_step(
        cls,
        factory: Callable[[int], Iterable[Shape]],
        total_steps: int,
        **kwargs,
    ) -> Pattern:
        """Build a pattern by calling ``factory(step)`` for every step."""
        if total_steps < 1:
            raise ConfigurationError(f"total_steps must be at least 1, got {total_steps}")
        return cls([factory(step) for step in range(total_steps)], total_steps=total_steps, **kwargs)

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    def shapes_at(self, step: int) -> tuple[Shape, ...]:
        _check_step(step, self.total_steps)
        return self._steps[step]

    def _ordered(self, step: int) -> Iterable[Shape]:
        shapes = self.shapes_at(step)
        return shapes if self.paint_order is PaintOrder.FIRST else reversed(shapes)

    def evaluate(self, step: int, x: float, y: float) -> HitResult:
        for shape in self._ordered(step):
            result = shape.hit_test(x, y)
            if result.covered:
                return HitResult(True, int(shape.color))
        return HitResult(False, self.background)

    def evaluate_grid(
        self, step: int, xs: np.ndarray, ys: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised ``evaluate`` over coordinate arrays.

        Returns:
            ``(covered, colors)`` arrays shaped like ``xs``
        """
        covered = np.zeros(np.shape(xs), dtype=bool)
        colors = np.full(np.shape(xs), self.background, dtype=np.uint8)

        # Shapes are visited in priority order and only claim unclaimed pixels
        for shape in self._ordered(step):
            hit = shape.coverage(xs, ys) & ~covered
            if hit.any():
                colors[hit] = int(shape.color)
                covered |= hit
        return covered, colors

    def __repr__(self) -> str:
        return f"Pattern(total_steps={self.total_steps}, paint_order={self.paint_order.name})"


class CompositePattern:
    """Ordered stack of patterns; later children paint over earlier ones.

    Args:
        children: Patterns (or composites) in paint order, bottom first
        background: Color reported where no child covers the pixel
    """

    def __init__(
        self, children: Sequence[PatternEvaluator], background: int = Color.WHITE
    ):
        if not children:
            raise ConfigurationError("A composite pattern needs at least one child")

        periods = {child.total_steps for child in children}
        if len(periods) != 1:
            raise ConfigurationError(
                f"Composite children disagree on step count: {sorted(periods)}",
                context={"step_counts": [child.total_steps for child in children]},
            )

        self.children: tuple[PatternEvaluator, ...] = tuple(children)
        self.background = int(background)
        self._total_steps = periods.pop()

    @property
    def total_steps(self) -> int:
        return self._total_steps

    def evaluate(self, step: int, x: float, y: float) -> HitResult:
        _check_step(step, self.total_steps)
        result = HitResult(False, self.background)
        for child in self.children:
            child_result = child.evaluate(step, x, y)
            if child_result.covered:
                result = child_result
        return result

    def evaluate_grid(
        self, step: int, xs: np.ndarray, ys: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        _check_step(step, self.total_steps)
        covered = np.zeros(np.shape(xs), dtype=bool)
        colors = np.full(np.shape(xs), self.background, dtype=np.uint8)
        for child in self.children:
            child_covered, child_colors = child.evaluate_grid(step, xs, ys)
            colors[child_covered] = child_colors[child_covered]
            covered |= child_covered
        return covered, colors

    def __repr__(self) -> str:
        return f"CompositePattern(children={len(self.children)}, total_steps={self.total_steps})"

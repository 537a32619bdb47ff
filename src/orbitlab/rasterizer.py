"""Rasterize a pattern step into an indexed-color frame."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from PIL import Image

from .error_handling import ConfigurationError
from .palette import DEFAULT_PALETTE, Color, Palette
from .patterns import PatternEvaluator


@dataclass(frozen=True, eq=False)
class Frame:
    """Palette indices for one step, shaped ``(height, width)``.

    The pixels are copied on construction; the copy is read-only.
    """

    step: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = np.array(self.pixels, dtype=np.uint8)
        if pixels.ndim != 2:
            raise ConfigurationError(
                f"Frame pixels must be 2D, got shape {pixels.shape}",
                context={"step": self.step},
            )
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def color_at(self, x: int, y: int) -> int:
        return int(self.pixels[y, x])

    def to_image(self, palette: Palette = DEFAULT_PALETTE) -> Image.Image:
        """Mode ``P`` image using ``palette``."""
        image = Image.frombytes(
            "P",
            (self.width, self.height),
            np.ascontiguousarray(self.pixels, dtype=np.uint8).tobytes(),
        )
        image.putpalette(palette.flat())
        return image


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ConfigurationError(f"Frame size must be positive, got {width}x{height}")


@lru_cache(maxsize=8)
def pixel_grid(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Pixel coordinate arrays shaped ``(height, width)``, shared between frames."""
    xs, ys = np.meshgrid(
        np.arange(width, dtype=float), np.arange(height, dtype=float), indexing="xy"
    )
    xs.setflags(write=False)
    ys.setflags(write=False)
    return xs, ys


def render(
    width: int,
    height: int,
    step: int,
    pattern: PatternEvaluator,
    background: int = Color.WHITE,
) -> Frame:
    """Evaluate ``pattern`` at ``step`` for every pixel of a ``width`` × ``height`` frame.

    Uncovered pixels get ``background``.
    """
    _check_size(width, height)
    xs, ys = pixel_grid(width, height)
    covered, colors = pattern.evaluate_grid(step, xs, ys)

    pixels = np.where(covered, colors, np.uint8(background)).astype(np.uint8)
    return Frame(step=step, pixels=pixels)


def render_pixelwise(
    width: int,
    height: int,
    step: int,
    pattern: PatternEvaluator,
    background: int = Color.WHITE,
) -> Frame:
    """Same output as ``render``, one ``pattern.evaluate`` call per pixel."""
    _check_size(width, height)
    pixels = np.empty((height, width), dtype=np.uint8)
    for x in range(width):
        for y in range(height):
            covered, color = pattern.evaluate(step, float(x), float(y))
            pixels[y, x] = color if covered else background
    return Frame(step=step, pixels=pixels)

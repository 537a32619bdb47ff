"""The fixed 8-color palette shared by every frame."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Color(IntEnum):
    """Palette indices, in palette order."""

    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    YELLOW = 6
    WHITE = 7


@dataclass(frozen=True)
class Palette:
    """Read-only ordered RGB palette.

    Frames only ever contain indices into this palette. One instance is built
    at import time and handed explicitly to the rasterizer and the encoder.
    """

    colors: tuple[tuple[int, int, int], ...]

    def __post_init__(self) -> None:
        if not 0 < len(self.colors) <= 256:
            raise ValueError(f"Palette must hold 1-256 colors, got {len(self.colors)}")
        for rgb in self.colors:
            if len(rgb) != 3 or any(not 0 <= channel <= 255 for channel in rgb):
                raise ValueError(f"Invalid RGB triple in palette: {rgb!r}")

    def __len__(self) -> int:
        return len(self.colors)

    def rgb(self, index: int) -> tuple[int, int, int]:
        """RGB triple for a palette index."""
        return self.colors[index]

    def flat(self) -> list[int]:
        """Flattened ``[r, g, b, r, g, b, ...]`` list as Pillow's ``putpalette`` expects."""
        return [channel for rgb in self.colors for channel in rgb]


DEFAULT_PALETTE = Palette(
    colors=(
        (0x00, 0x00, 0x00),
        (0x00, 0x00, 0xFF),
        (0x00, 0xFF, 0x00),
        (0x00, 0xFF, 0xFF),
        (0xFF, 0x00, 0x00),
        (0xFF, 0x00, 0xFF),
        (0xFF, 0xFF, 0x00),
        (0xFF, 0xFF, 0xFF),
    )
)

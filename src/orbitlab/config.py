"""Configuration settings for OrbitLab."""

from dataclasses import dataclass
from pathlib import Path

from .error_handling import ConfigurationError


@dataclass(frozen=True)
class RenderConfig:
    """Frame geometry and timing shared by every compiled-in animation."""

    # Frame dimensions in pixels
    WIDTH: int = 240
    HEIGHT: int = 240

    # Steps in one period of the procedural motion
    TOTAL_STEPS: int = 120

    # Per-frame display delay; 0 means "as fast as the viewer renders"
    FRAME_DELAY_MS: int = 0

    # GIF loop count (0 = loop forever)
    LOOP: int = 0

    OUTPUT_PATH: Path = Path("rgb.gif")

    def __post_init__(self) -> None:
        if self.WIDTH <= 0 or self.HEIGHT <= 0:
            raise ConfigurationError(
                f"Frame size must be positive, got {self.WIDTH}x{self.HEIGHT}"
            )
        if self.TOTAL_STEPS < 1:
            raise ConfigurationError(
                f"TOTAL_STEPS must be at least 1, got {self.TOTAL_STEPS}"
            )
        if self.FRAME_DELAY_MS < 0:
            raise ConfigurationError(
                f"FRAME_DELAY_MS must be non-negative, got {self.FRAME_DELAY_MS}"
            )
        if self.LOOP < 0:
            raise ConfigurationError(f"LOOP must be non-negative, got {self.LOOP}")

    @property
    def center(self) -> tuple[float, float]:
        """Frame centre, truncated to whole pixels like the frame halves."""
        return float(self.WIDTH // 2), float(self.HEIGHT // 2)


@dataclass(frozen=True)
class ParallelConfig:
    """Configuration for multi-process frame rendering."""

    # None resolves to the CPU count
    MAX_WORKERS: int | None = None

    # Below this many steps the process pool costs more than it saves
    MIN_STEPS_FOR_PARALLEL: int = 8

    def __post_init__(self) -> None:
        if self.MAX_WORKERS is not None and self.MAX_WORKERS < 1:
            raise ConfigurationError(
                f"MAX_WORKERS must be at least 1, got {self.MAX_WORKERS}"
            )
        if self.MIN_STEPS_FOR_PARALLEL < 1:
            raise ConfigurationError(
                f"MIN_STEPS_FOR_PARALLEL must be at least 1, got {self.MIN_STEPS_FOR_PARALLEL}"
            )


# Default configuration instances
DEFAULT_RENDER_CONFIG = RenderConfig()
DEFAULT_PARALLEL_CONFIG = ParallelConfig()

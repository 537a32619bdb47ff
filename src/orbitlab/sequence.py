"""Assemble rendered frames into the animation handed to the encoder."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from tqdm import tqdm

from .error_handling import ConfigurationError, RenderError, error_context
from .multiprocessing_support import ParallelFrameRenderer
from .palette import DEFAULT_PALETTE, Color, Palette
from .patterns import PatternEvaluator
from .rasterizer import Frame, render

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSequence:
    """Ordered frames with their display delays and the shared palette."""

    frames: tuple[Frame, ...]
    delays: tuple[int, ...]
    palette: Palette = DEFAULT_PALETTE

    def __post_init__(self) -> None:
        if not self.frames:
            raise ConfigurationError("A frame sequence needs at least one frame")
        if len(self.frames) != len(self.delays):
            raise ConfigurationError(
                f"{len(self.frames)} frames but {len(self.delays)} delays"
            )
        for index, frame in enumerate(self.frames):
            if frame.step != index:
                raise ConfigurationError(
                    f"Frame at position {index} was rendered for step {frame.step}"
                )
        sizes = {(frame.width, frame.height) for frame in self.frames}
        if len(sizes) != 1:
            raise ConfigurationError(f"Frames have mixed sizes: {sorted(sizes)}")

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def size(self) -> tuple[int, int]:
        return self.frames[0].width, self.frames[0].height


def assemble_sequence(
    pattern: PatternEvaluator,
    width: int,
    height: int,
    delay_ms: int = 0,
    palette: Palette = DEFAULT_PALETTE,
    background: int = Color.WHITE,
    workers: int = 1,
    show_progress: bool = False,
) -> FrameSequence:
    """Render every step of ``pattern`` and collect the frames in step order.

    Args:
        pattern: Pattern to rasterize
        width: Frame width in pixels
        height: Frame height in pixels
        delay_ms: Display delay attached to every frame
        palette: Palette the frame indices refer to
        background: Palette index for uncovered pixels
        workers: Worker processes; 1 renders in this process
        show_progress: Show a tqdm progress bar

    Returns:
        The complete frame sequence
    """
    if delay_ms < 0:
        raise ConfigurationError(f"delay_ms must be non-negative, got {delay_ms}")
    if workers < 1:
        raise ConfigurationError(f"workers must be at least 1, got {workers}")

    total = pattern.total_steps
    start_time = time.time()

    if workers > 1:
        with tqdm(total=total, desc="🌀 Rendering frames", unit="frame", disable=not show_progress) as progress:
            frames = ParallelFrameRenderer(max_workers=workers, logger=logger).render_frames(
                pattern,
                width,
                height,
                background,
                progress_callback=lambda done, _total: progress.update(done - progress.n),
            )
    else:
        frames = []
        with error_context("render animation frames", RenderError, logger=logger):
            for step in tqdm(range(total), desc="🌀 Rendering frames", unit="frame", disable=not show_progress):
                frames.append(render(width, height, step, pattern, background))

    logger.info(f"Rendered {total} frames of {width}x{height} in {time.time() - start_time:.2f}s")

    return FrameSequence(
        frames=tuple(frames),
        delays=tuple(delay_ms for _ in frames),
        palette=palette,
    )

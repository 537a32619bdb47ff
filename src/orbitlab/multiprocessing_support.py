"""Multiprocessing support for OrbitLab frame rendering.

Steps are independent once their shapes exist, so every step of an
animation can be rasterized in its own worker process. The pattern is sent
to each worker once, through the pool initializer, and results are put
back into step order before they are returned.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import time
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np

from .error_handling import RenderError, error_context
from .patterns import PatternEvaluator
from .rasterizer import Frame, render


@dataclass
class FrameRenderTask:
    """Task specification for rendering one step."""

    step: int
    width: int
    height: int
    background: int
    task_id: str


@dataclass
class FrameRenderResult:
    """Result from rendering one step."""

    task_id: str
    step: int
    success: bool
    pixels: np.ndarray | None = None
    error_message: str | None = None
    render_time: float = 0.0


# Set in each worker process by _init_worker
_worker_pattern: PatternEvaluator | None = None


def _init_worker(pattern: PatternEvaluator) -> None:
    global _worker_pattern
    _worker_pattern = pattern


def _render_single_frame(task: FrameRenderTask) -> FrameRenderResult:
    """Worker function for rendering a single step.

    Runs in a worker process against the pattern installed by
    ``_init_worker``.
    """
    start_time = time.time()

    try:
        if _worker_pattern is None:
            raise RuntimeError("worker process has no pattern installed")

        frame = render(task.width, task.height, task.step, _worker_pattern, task.background)

        return FrameRenderResult(
            task_id=task.task_id,
            step=task.step,
            success=True,
            pixels=np.array(frame.pixels),
            render_time=time.time() - start_time,
        )

    except Exception as e:
        return FrameRenderResult(
            task_id=task.task_id,
            step=task.step,
            success=False,
            error_message=f"{type(e).__name__}: {e}",
            render_time=time.time() - start_time,
        )


class ParallelFrameRenderer:
    """Render animation steps across a pool of worker processes."""

    def __init__(
        self,
        max_workers: int | None = None,
        logger: logging.Logger | None = None,
    ):
        """Initialize the parallel frame renderer.

        Args:
            max_workers: Maximum number of worker processes (default: CPU count)
            logger: Logger instance for debugging
        """
        self.max_workers = max_workers or get_optimal_worker_count()
        self.logger = logger or logging.getLogger(__name__)

    def render_frames(
        self,
        pattern: PatternEvaluator,
        width: int,
        height: int,
        background: int,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> list[Frame]:
        """Render every step of ``pattern``.

        Args:
            pattern: Pattern to rasterize; must be picklable
            width: Frame width in pixels
            height: Frame height in pixels
            background: Palette index for uncovered pixels
            progress_callback: Optional callback for progress updates (completed, total)

        Returns:
            Frames ordered by step

        Raises:
            RenderError: if any step fails; no partial sequence is returned
        """
        total = pattern.total_steps
        tasks = [
            FrameRenderTask(
                step=step,
                width=width,
                height=height,
                background=background,
                task_id=f"step_{step}",
            )
            for step in range(total)
        ]

        start_time = time.time()
        self.logger.info(
            f"Starting parallel frame rendering: {total} steps with {self.max_workers} workers"
        )

        results: list[FrameRenderResult] = []
        with error_context("run frame worker pool", RenderError, logger=self.logger):
            with ProcessPoolExecutor(
                max_workers=self.max_workers,
                initializer=_init_worker,
                initargs=(pattern,),
            ) as executor:
                futures = [executor.submit(_render_single_frame, task) for task in tasks]
                for completed, future in enumerate(as_completed(futures), start=1):
                    results.append(future.result())
                    if progress_callback:
                        progress_callback(completed, total)

        failures = [r for r in results if not r.success]
        if failures:
            first = min(failures, key=lambda r: r.step)
            raise RenderError(
                f"{len(failures)} of {total} steps failed to render; "
                f"first failure at step {first.step}: {first.error_message}",
                context={"failed_steps": sorted(r.step for r in failures)},
            )

        elapsed_time = time.time() - start_time
        self.logger.info(
            f"Parallel frame rendering completed: {total} frames in {elapsed_time:.2f}s "
            f"({total / max(elapsed_time, 1e-9):.1f} frames/sec)"
        )

        results.sort(key=lambda r: r.step)
        return [Frame(step=r.step, pixels=r.pixels) for r in results]


def get_optimal_worker_count() -> int:
    """Worker count for CPU-bound rendering: one per core."""
    return mp.cpu_count()

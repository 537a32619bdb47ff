"""Render a compiled-in animation to an animated GIF."""

import time
from pathlib import Path

import click

from ..animations import ANIMATIONS, get_animation
from ..config import DEFAULT_PARALLEL_CONFIG, DEFAULT_RENDER_CONFIG
from ..encoder import write_gif
from ..io import setup_logging
from ..sequence import assemble_sequence
from .utils import (
    display_common_header,
    display_path_info,
    handle_generic_error,
    handle_keyboard_interrupt,
    validate_and_get_worker_count,
)


@click.command()
@click.argument("name", type=click.Choice(sorted(ANIMATIONS)))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_RENDER_CONFIG.OUTPUT_PATH,
    show_default=True,
    help="Where to write the GIF",
)
@click.option(
    "--workers",
    "-j",
    type=int,
    default=1,
    show_default=True,
    help="Worker processes for rendering (0 = one per CPU core)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    help="Show a progress bar while rendering",
)
def render(name: str, output: Path, workers: int, log_level: str, progress: bool) -> None:
    """Render the animation NAME and write it as an animated GIF.

    Run `orbitlab list` to see the available animations.
    """
    try:
        setup_logging(log_level)
        config = DEFAULT_RENDER_CONFIG
        validated_workers = validate_and_get_worker_count(
            workers, DEFAULT_PARALLEL_CONFIG.MAX_WORKERS
        )

        start_time = time.time()
        pattern = get_animation(name).build(config)

        # Small animations are not worth a process pool
        if pattern.total_steps < DEFAULT_PARALLEL_CONFIG.MIN_STEPS_FOR_PARALLEL:
            validated_workers = 1

        display_common_header(f"OrbitLab — {name}")
        display_path_info("Output", output, "📄")
        click.echo(f"👥 Workers: {validated_workers}")

        sequence = assemble_sequence(
            pattern,
            config.WIDTH,
            config.HEIGHT,
            delay_ms=config.FRAME_DELAY_MS,
            workers=validated_workers,
            show_progress=progress,
        )
        write_gif(sequence, output, loop=config.LOOP)

        click.echo(f"✅ Built {len(sequence)} frames in {time.time() - start_time:.1f}s")

    except KeyboardInterrupt:
        handle_keyboard_interrupt("Render")
    except Exception as e:
        handle_generic_error("Render", e)

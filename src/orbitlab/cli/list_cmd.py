"""List the compiled-in animations."""

import click
from rich.console import Console
from rich.table import Table

from ..animations import ANIMATIONS
from ..config import DEFAULT_RENDER_CONFIG


@click.command(name="list")
def list_animations() -> None:
    """List the animations that `orbitlab render` can produce."""
    console = Console()
    config = DEFAULT_RENDER_CONFIG

    table = Table(
        title=f"🎞️  Animations ({config.WIDTH}x{config.HEIGHT}, {config.TOTAL_STEPS} frames)",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for name, spec in sorted(ANIMATIONS.items()):
        table.add_row(name, spec.description)

    console.print(table)

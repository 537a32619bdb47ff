"""CLI module for OrbitLab commands.

This module re-exports all command functions so the console script and the
tests share one entry point, while keeping commands in separate modules.
"""

import click

from .. import __version__
from .list_cmd import list_animations
from .render_cmd import render


@click.group()
@click.version_option(version=__version__, prog_name="orbitlab")
def main() -> None:
    """🌀 OrbitLab — procedural geometric GIF animations."""
    pass


main.add_command(render)
main.add_command(list_animations)

__all__ = [
    "list_animations",
    "main",
    "render",
]

"""Shared utilities for CLI commands."""

import sys
from pathlib import Path

import click

from ..multiprocessing_support import get_optimal_worker_count


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def validate_and_get_worker_count(workers: int, max_workers: int | None = None) -> int:
    """Resolve a ``--workers`` value; 0 means ``max_workers`` or one per CPU core."""
    if workers < 0:
        click.echo(f"❌ Invalid worker count: {workers} (must be 0 or more)", err=True)
        sys.exit(1)
    return workers if workers > 0 else (max_workers or get_optimal_worker_count())


def display_common_header(title: str) -> None:
    """Display a common header for CLI commands."""
    click.echo(f"🌀 {title}")


def display_path_info(label: str, path: Path, emoji: str = "📁") -> None:
    """Display path information with consistent formatting."""
    click.echo(f"{emoji} {label}: {path}")

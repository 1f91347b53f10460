"""Main CLI command: render the status line from the host's JSON snapshot."""

import logging
from pathlib import Path
from typing import Optional

import typer

from statusline import __version__
from statusline.collaborators import build_cache_manager
from statusline.config import ConfigError, StatuslineConfig, default_config, load_config
from statusline.logging_config import resolve_log_level, setup_logging
from statusline.render import directory_label, paint, render_snapshot
from statusline.snapshot import RenderSnapshot, decode_snapshot

log = logging.getLogger(__name__)


def read_stdin() -> str:
    """Read the snapshot; an interactive terminal means there is none."""
    stream = typer.get_text_stream("stdin")
    if stream.isatty():
        return ""
    return stream.read()


def fallback_lines(snapshot: RenderSnapshot, config: StatuslineConfig) -> tuple[str, str]:
    """Minimal output used when rendering fails unexpectedly."""
    palette = config.palette
    line1 = "  ".join([
        directory_label(snapshot.project_dir, snapshot.current_dir, palette),
        paint(snapshot.model_name, palette.peach),
    ])
    return line1, paint("⎇", palette.dimmer)


def main_command(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.claude/statusline.yaml or $STATUSLINE_CONFIG)",
    ),
    cache_dir: Optional[Path] = typer.Option(
        None,
        "--cache-dir",
        help="Directory for cache records (default: system temp dir)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level for stderr diagnostics (default: WARNING)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the version and exit",
    ),
) -> None:
    """Render the two-line status display from a JSON snapshot on stdin."""
    if version:
        typer.echo(f"statusline {__version__}")
        raise typer.Exit(0)

    ctx.obj = {"config_path": config_path, "cache_dir": cache_dir}

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    config_error = None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        config = default_config()
        config_error = e

    setup_logging(resolve_log_level(log_level, config.log_level))
    if config_error is not None:
        log.warning(f"{config_error}; using defaults")

    snapshot = decode_snapshot(read_stdin())

    try:
        line1, line2 = render_snapshot(snapshot, build_cache_manager(config, cache_dir), config)
    except Exception:
        # The host expects two lines no matter what
        log.exception("Rendering failed")
        line1, line2 = fallback_lines(snapshot, config)

    typer.echo(line1)
    typer.echo(line2)

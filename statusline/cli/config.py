"""CLI commands for statusline configuration."""

from pathlib import Path
from typing import Optional

import typer
import yaml

from statusline.config import (
    ConfigError,
    config_to_dict,
    default_config,
    get_config_path,
    load_config,
    save_config,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage statusline configuration in ~/.claude/statusline.yaml",
    add_completion=False,
)


def _config_path(ctx: typer.Context) -> Path:
    path: Optional[Path] = (ctx.obj or {}).get("config_path")
    return path or get_config_path()


@config_app.command("path")
def config_path_command(ctx: typer.Context) -> None:
    """Show where the configuration file is read from."""
    path = _config_path(ctx)
    status = "exists" if path.exists() else "not created, using defaults"
    typer.echo(f"{path} ({status})")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration as YAML."""
    try:
        config = load_config(_config_path(ctx))
    except ConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(yaml.safe_dump(config_to_dict(config), default_flow_style=None, sort_keys=False), nl=False)


@config_app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration file",
    ),
) -> None:
    """Write the default configuration file."""
    path = _config_path(ctx)
    if path.exists() and not force:
        typer.echo(f"Configuration already exists at {path}. Use --force to overwrite.", err=True)
        raise typer.Exit(1)

    try:
        written = save_config(default_config(), path)
    except ConfigError as e:
        typer.echo(f"Error writing configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Wrote default configuration to {written}")

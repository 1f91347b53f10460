"""CLI entry point for statusline.

This module provides the main CLI application: rendering by default, plus
configuration and cache inspection subcommands.
"""

import typer

from statusline.cli.cache import cache_app
from statusline.cli.config import config_app
from statusline.cli.main import main_command

# Main application
app = typer.Typer(
    name="statusline",
    help="statusline: two-line pastel status display",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")
app.add_typer(cache_app, name="cache")

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "cache_app",
    "main_command",
]

"""Pastel two-line status display for coding-agent hosts."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("pastel-statusline")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"

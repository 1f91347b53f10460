"""Configuration management for statusline.

Handles the optional user-level configuration file (~/.claude/statusline.yaml):
- Palette: named RGB colours used by every renderer
- Thresholds: visibility policy for reset times, overlays and extra usage
- CacheTTL / Timeouts: cache lifetimes and collaborator time limits
- StatuslineConfig: the immutable top-level configuration object
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

RGB = tuple[int, int, int]


class ConfigError(Exception):
    """Raised when there's an error with the statusline configuration."""

    pass


class CostDisplay(Enum):
    """When the session cost is shown on line 1."""

    ALWAYS = "always"
    NEAR_LIMIT = "near-limit"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Palette(_Frozen):
    """Pastel palette. All values are 24-bit RGB triples."""

    sand: RGB = (205, 185, 165)
    peach: RGB = (195, 160, 155)
    lavender: RGB = (165, 150, 200)
    sage: RGB = (135, 180, 160)
    mauve: RGB = (185, 140, 160)
    salmon: RGB = (205, 140, 125)
    slate: RGB = (140, 160, 185)
    amber: RGB = (235, 195, 80)
    dim: RGB = (80, 75, 70)
    dimmer: RGB = (60, 58, 55)
    # Baseline that partially-lit pips and muted gradients blend toward
    dim_base: RGB = (50, 48, 45)
    neutral: RGB = (195, 180, 165)


class Thresholds(_Frozen):
    """Visibility policy for the quota line."""

    short_reset_pct: int = 75
    short_reset_minutes: int = 15
    long_reset_pct: int = 80
    long_reset_hours: int = 4
    overlay_pct: int = 80
    extra_near_pct: int = 95


class CacheTTL(_Frozen):
    """Cache lifetimes in seconds."""

    git: float = 30
    usage: float = 60
    update: float = 3600


class Timeouts(_Frozen):
    """Collaborator time limits in seconds."""

    git: float = 3.0
    usage: float = 5.0
    update: float = 3.0


class StatuslineConfig(_Frozen):
    """Immutable configuration passed to the renderers and the cache manager."""

    palette: Palette = Palette()
    thresholds: Thresholds = Thresholds()
    ttl: CacheTTL = CacheTTL()
    timeouts: Timeouts = Timeouts()
    cost_display: CostDisplay = CostDisplay.NEAR_LIMIT
    autocompact_buffer: int = 33000
    cache_dir: Optional[Path] = None
    settings_path: Path = Path.home() / ".claude" / "settings.json"
    credentials_path: Path = Path.home() / ".claude" / ".credentials.json"
    log_level: str = "WARNING"

    @field_validator("cache_dir", "settings_path", "credentials_path", mode="after")
    @classmethod
    def expand_home(cls, v: Optional[Path]) -> Optional[Path]:
        """Allow ~ in configured paths."""
        return v.expanduser() if v is not None else v


_CONFIG_DIR = Path.home() / ".claude"


def get_config_path() -> Path:
    """Get path to the statusline config file.

    STATUSLINE_CONFIG overrides the default location.

    Returns:
        Path to ~/.claude/statusline.yaml
    """
    override = os.environ.get("STATUSLINE_CONFIG")
    if override:
        return Path(override).expanduser()
    return _CONFIG_DIR / "statusline.yaml"


def default_config() -> StatuslineConfig:
    """Return the built-in configuration."""
    return StatuslineConfig()


def load_config(path: Optional[Path] = None) -> StatuslineConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file to read. Defaults to get_config_path().

    Returns:
        The validated configuration. Defaults if the file doesn't exist.

    Raises:
        ConfigError: If the file can't be read, parsed or validated.
    """
    config_file = path or get_config_path()

    if not config_file.exists():
        return default_config()

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config in {config_file} must be a mapping")

    try:
        return StatuslineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}")


def config_to_dict(config: StatuslineConfig) -> Dict[str, Any]:
    """Convert a config into plain YAML-friendly data."""
    return config.model_dump(mode="json", exclude_none=True)


def save_config(config: StatuslineConfig, path: Optional[Path] = None) -> Path:
    """Save configuration to a YAML file.

    Args:
        config: Configuration to save.
        path: Destination file. Defaults to get_config_path().

    Returns:
        The path written.
    """
    config_file = path or get_config_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_file, "w") as f:
            yaml.safe_dump(config_to_dict(config), f, default_flow_style=None, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}")

    return config_file

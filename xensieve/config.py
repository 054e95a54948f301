"""
Configuration management for xensieve.

Handles loading and saving user configuration from:
- XDG config directory: ~/.config/xensieve/config.json
- Fallback: ~/.xensieve/config.json
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict, field

logger = logging.getLogger(__name__)


@dataclass
class RangeConfig:
    """Default source range for CLI iteration commands (stop exclusive)."""
    start: int = 0
    stop: int = 100
    step: int = 1

    def to_range(self) -> range:
        return range(self.start, self.stop, self.step)


@dataclass
class CLIConfig:
    """CLI default options."""
    verbose: bool = False
    color: bool = True


@dataclass
class XensieveConfig:
    """Main xensieve configuration."""
    range: RangeConfig = field(default_factory=RangeConfig)
    cli: CLIConfig = field(default_factory=CLIConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "range": asdict(self.range),
            "cli": asdict(self.cli),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'XensieveConfig':
        """Create from dictionary."""
        range_data = data.get("range", {})
        cli_data = data.get("cli", {})
        return cls(
            range=RangeConfig(**range_data),
            cli=CLIConfig(**cli_data),
        )


def get_config_path() -> Path:
    """
    Get configuration file path.

    Follows XDG Base Directory specification:
    1. ~/.config/xensieve/config.json
    2. Fallback: ~/.xensieve/config.json

    Returns:
        Path to config file
    """
    xdg_config_home = Path.home() / ".config"
    if xdg_config_home.exists():
        config_dir = xdg_config_home / "xensieve"
    else:
        config_dir = Path.home() / ".xensieve"

    return config_dir / "config.json"


def load_config() -> XensieveConfig:
    """
    Load configuration from file.

    Returns:
        XensieveConfig instance with loaded values or defaults
    """
    config_path = get_config_path()

    if not config_path.exists():
        return XensieveConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return XensieveConfig.from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError, AttributeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Using default configuration")
        return XensieveConfig()


def save_config(config: XensieveConfig) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save

    Returns:
        Path the configuration was written to
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def ensure_config_exists() -> Path:
    """
    Ensure configuration file exists, creating with defaults if not.

    Returns:
        Path to config file
    """
    config_path = get_config_path()

    if not config_path.exists():
        save_config(XensieveConfig())
        logger.info(f"Created default configuration at {config_path}")

    return config_path


def update_config(
    # Range settings
    range_start: Optional[int] = None,
    range_stop: Optional[int] = None,
    range_step: Optional[int] = None,
    # CLI settings
    cli_verbose: Optional[bool] = None,
    cli_color: Optional[bool] = None,
) -> XensieveConfig:
    """
    Update configuration.

    Only updates provided values, leaving others unchanged.

    Raises:
        ValueError: If range_step is 0
    """
    if range_step == 0:
        raise ValueError("Range step must not be zero")

    config = load_config()

    if range_start is not None:
        config.range.start = range_start
    if range_stop is not None:
        config.range.stop = range_stop
    if range_step is not None:
        config.range.step = range_step

    if cli_verbose is not None:
        config.cli.verbose = cli_verbose
    if cli_color is not None:
        config.cli.color = cli_color

    save_config(config)
    return config

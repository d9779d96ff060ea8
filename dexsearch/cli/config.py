"""Configuration management for dexsearch CLI.

Supports configuration from multiple sources with the following priority:
1. Command-line arguments
2. Environment variables
3. Configuration file (~/.dexsearch/config.yaml)
4. Default values
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
import logging

import yaml

from dexsearch.cli.formatting import OutputFormat
from dexsearch.cli.sprite import SPRITE_BASE_URL

logger = logging.getLogger(__name__)

# Configuration file locations to check
CONFIG_LOCATIONS = [
    Path.home() / ".dexsearch" / "config.yaml",
    Path.home() / ".dexsearch" / "config.json",
    Path.cwd() / ".dexsearch" / "config.yaml",
    Path.cwd() / ".dexsearch" / "config.json",
    Path.cwd() / "dexsearch.yaml",
    Path.cwd() / "dexsearch.json",
]

# Default configuration
DEFAULT_CONFIG = {
    "dataset_path": None,
    "limit": 5,
    "output": "table",
    "width": 80,
    "sprite": True,
    "sprite_width": 68,
    "sprite_base_url": SPRITE_BASE_URL,
    "timeout": 10.0,
    "verbose": False,
}

TRUTHY = ["true", "1", "yes"]

OUTPUT_FORMATS = [f.value for f in OutputFormat]

# Key -> (accepted types, lower bound, bound is inclusive)
NUMERIC_BOUNDS = {
    "limit": ((int,), 0, True),
    "width": ((int,), 20, True),
    "sprite_width": ((int,), 1, True),
    "timeout": ((int, float), 0, False),
}


def get_config_file() -> Optional[Path]:
    """Find configuration file in standard locations.

    Returns:
        Path to config file if found, None otherwise
    """
    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            logger.debug(f"Found config file at {config_path}")
            return config_path
    return None


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load configuration from file (YAML or JSON).

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        IOError: If file cannot be read
        ValueError: If file format is invalid
    """
    if not config_path.exists():
        raise IOError(f"Configuration file not found: {config_path}")

    if config_path.suffix not in [".yaml", ".yml", ".json"]:
        raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    try:
        content = config_path.read_text()
    except OSError as e:
        raise IOError(f"Error reading config file {config_path}: {e}")

    try:
        if config_path.suffix == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content) or {}
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def save_config_file(config: Dict[str, Any], config_path: Path, format: str = "json") -> bool:
    """Save configuration to file.

    Args:
        config: Configuration dictionary
        config_path: Destination path
        format: 'json' or 'yaml'

    Returns:
        True if saved, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if format == "yaml":
            content = yaml.safe_dump(config, default_flow_style=False, allow_unicode=True)
        else:
            content = json.dumps(config, indent=2)

        config_path.write_text(content)
        logger.info(f"Configuration saved to {config_path}")
        return True

    except OSError as e:
        logger.error(f"Error saving config file: {e}")
        return False


def _env_number(config: Dict[str, Any], key: str, env_var: str, cast) -> None:
    if env_var in os.environ:
        try:
            config[key] = cast(os.environ[env_var])
        except ValueError:
            logger.warning(f"Invalid {env_var} environment variable")


def _validate(config: Dict[str, Any]) -> None:
    """Replace out-of-range or mistyped values with their defaults."""
    for key, (types, lower, inclusive) in NUMERIC_BOUNDS.items():
        value = config.get(key)
        valid = isinstance(value, types) and not isinstance(value, bool) and (
            value >= lower if inclusive else value > lower
        )
        if not valid:
            logger.warning(f"Invalid value {value!r} for '{key}', using {DEFAULT_CONFIG[key]!r}")
            config[key] = DEFAULT_CONFIG[key]

    if config.get("output") not in OUTPUT_FORMATS:
        logger.warning(f"Invalid value {config.get('output')!r} for 'output', using 'table'")
        config["output"] = DEFAULT_CONFIG["output"]


def get_config(override: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Get CLI configuration from all sources.

    Configuration priority (highest to lowest):
    1. Override parameters
    2. Environment variables
    3. Configuration file
    4. Default values

    Args:
        override: Configuration overrides (typically from CLI args).
                  Keys with a None value are ignored.

    Returns:
        Complete configuration dictionary
    """
    # Start with defaults
    config = DEFAULT_CONFIG.copy()

    # Layer in config file if it exists
    config_file = get_config_file()
    if config_file:
        try:
            file_config = load_config_file(config_file)
            config.update(file_config)
            logger.debug(f"Loaded config from {config_file}")
        except (IOError, ValueError) as e:
            logger.warning(f"Could not load config file: {e}")

    # Layer in environment variables
    if "DEXSEARCH_DATASET" in os.environ:
        config["dataset_path"] = os.environ["DEXSEARCH_DATASET"]
    if "DEXSEARCH_OUTPUT" in os.environ:
        config["output"] = os.environ["DEXSEARCH_OUTPUT"]
    if "DEXSEARCH_SPRITE_URL" in os.environ:
        config["sprite_base_url"] = os.environ["DEXSEARCH_SPRITE_URL"]
    _env_number(config, "limit", "DEXSEARCH_LIMIT", int)
    _env_number(config, "width", "DEXSEARCH_WIDTH", int)
    if "DEXSEARCH_SPRITE" in os.environ:
        config["sprite"] = os.environ["DEXSEARCH_SPRITE"].lower() in TRUTHY
    if "DEXSEARCH_VERBOSE" in os.environ:
        config["verbose"] = os.environ["DEXSEARCH_VERBOSE"].lower() in TRUTHY

    # Layer in overrides (highest priority)
    if override:
        config.update({k: v for k, v in override.items() if v is not None})

    _validate(config)
    return config


def init_config(config_path: Optional[Path] = None) -> bool:
    """Initialize a new configuration file.

    Args:
        config_path: Path where to create config file (default: ~/.dexsearch/config.json)

    Returns:
        True if successful, False otherwise
    """
    if config_path is None:
        config_path = Path.home() / ".dexsearch" / "config.json"

    format = "yaml" if config_path.suffix in [".yaml", ".yml"] else "json"
    return save_config_file(DEFAULT_CONFIG, config_path, format=format)

"""Loading of the widget template from disk.

Hides the file format (JSON or YAML) from the rest of the package.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import BotConfig

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class ConfigError(Exception):
    """Raised when a template file cannot be read or validated."""


def load_bot_config(path: str | Path | None = None) -> BotConfig:
    """Load the widget template.

    Args:
        path: Path to a .json/.yaml/.yml template. None returns the defaults.

    Returns:
        Validated BotConfig

    Raises:
        ConfigError: If the file is missing, unparseable, or invalid
    """
    if path is None:
        return BotConfig()

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ConfigError(
            f"Unsupported config format: {suffix or '<none>'}. "
            f"Supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        if suffix == ".json":
            data = json.loads(raw_text)
        else:
            data = yaml.safe_load(raw_text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse config file {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        config = BotConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    logger.debug("Loaded widget config from %s", config_path)
    return config

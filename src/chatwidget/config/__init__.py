"""Widget configuration module.

Provides the read-only display strings and style parameters of the widget.
"""

from .loader import ConfigError, load_bot_config
from .models import BotConfig, CssConfig

__all__ = [
    "BotConfig",
    "ConfigError",
    "CssConfig",
    "load_bot_config",
]

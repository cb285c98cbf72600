from .loader import ConfigError, load_config, parse_config
from .models import AppConfig, LoggingConfig, OutputConfig, PacingConfig, SieveSettings

# Config exports are intentionally small.
__all__ = [
    "AppConfig",
    "ConfigError",
    "LoggingConfig",
    "OutputConfig",
    "PacingConfig",
    "SieveSettings",
    "load_config",
    "parse_config",
]

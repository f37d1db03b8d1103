from .loader import ConfigError, load_config, parse_config
from .models import AdapterConfig, AppConfig, LoggingConfig

__all__ = ["AdapterConfig", "AppConfig", "ConfigError", "LoggingConfig", "load_config", "parse_config"]

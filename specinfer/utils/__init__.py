"""Utility modules for specinfer."""

from .config import Config, CheckConfig, load_config, save_config
from .logging import setup_logger, log_with_data, timed

__all__ = [
    "Config",
    "CheckConfig",
    "load_config",
    "save_config",
    "setup_logger",
    "log_with_data",
    "timed",
]

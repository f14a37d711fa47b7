"""Configuration and logging setup"""

from .settings import LOGGING, Settings, configure_logging, get_settings

__all__ = ["LOGGING", "Settings", "configure_logging", "get_settings"]

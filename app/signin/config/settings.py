"""Client settings

Values are read from the environment (or a .env file) through
python-decouple. Nothing here is persisted between sessions.
"""

import logging.config
from dataclasses import dataclass
from typing import Optional

from decouple import UndefinedValueError
from decouple import config as env

from signin.error.exceptions import ConfigurationException

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        # Client logging
        "signin": {
            "handlers": ["console"],
            "level": env("APP_LOG_LEVEL", default="INFO"),
            "propagate": False,
        },
        # Third party libraries
        "urllib3": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}


def _optional_float(value: str) -> Optional[float]:
    """Cast empty strings to None, anything else to float"""
    if value is None or str(value).strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Resolved client settings

    Attributes:
        api_base_url: Base URL of the authentication and OTP endpoints
        client_api_key: Optional key sent as x-client-api-key
        api_timeout: Optional transport timeout in seconds (None waits forever)
        supports_registration: Whether the login/register switch is offered
    """
    api_base_url: str
    client_api_key: str = ""
    api_timeout: Optional[float] = None
    supports_registration: bool = False

    def endpoint(self, name: str) -> str:
        """Build an absolute endpoint URL from a relative name"""
        return f"{self.api_base_url.rstrip('/')}/{name.lstrip('/')}"


def get_settings() -> Settings:
    """Load settings from the environment

    Returns:
        Settings: Resolved settings

    Raises:
        ConfigurationException: If a value is missing or cannot be cast
    """
    try:
        base_url = env("API_BASE_URL", default="http://localhost:8001/api")
        if not base_url.strip():
            raise ValueError("API_BASE_URL must not be empty")
        return Settings(
            api_base_url=base_url,
            client_api_key=env("CLIENT_API_KEY", default=""),
            api_timeout=env("API_TIMEOUT", default="", cast=_optional_float),
            supports_registration=env("SUPPORTS_REGISTRATION", default=False, cast=bool),
        )
    except (UndefinedValueError, ValueError) as e:
        raise ConfigurationException(
            message=f"Invalid configuration: {str(e)}",
            code="CONFIG_ERROR",
            service="settings",
            action="load"
        ) from e


def configure_logging() -> None:
    """Apply the logging configuration"""
    logging.config.dictConfig(LOGGING)

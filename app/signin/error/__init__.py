"""Error handling

Exceptions, validation results and the handler that turns failures into
screen status lines.
"""

from .exceptions import (
    ApiRejection,
    ComponentException,
    ConfigurationException,
    FlowException,
    ServiceException,
    SystemException,
    TransportError,
)
from .types import ErrorContext, ErrorType, ValidationResult

__all__ = [
    "ApiRejection",
    "ComponentException",
    "ConfigurationException",
    "FlowException",
    "ServiceException",
    "SystemException",
    "TransportError",
    "ErrorContext",
    "ErrorType",
    "ValidationResult",
]

"""Centralized error handling with clear boundaries

Every failure a screen can hit is turned into a status line here:
- validation: local checks that fail before any network call
- rejection: the collaborator answered and refused
- transport: the collaborator could not be reached

No error is re-raised past the component that started the action.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from signin.flow.types import TransientStatus

from .exceptions import ApiRejection, TransportError
from .types import NETWORK_ERROR, ErrorContext, ErrorType, ValidationResult

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Central error handling with clear boundaries"""

    @classmethod
    def _log(cls, context: ErrorContext, extra: Optional[Dict] = None, level: int = logging.ERROR) -> None:
        """Log error with context"""
        logger.log(
            level,
            f"Error handled: {context.error_type.name.lower()}: {context.message}",
            extra={
                "error": {
                    "type": context.error_type.name.lower(),
                    "message": context.message,
                    "details": context.details or {},
                    "timestamp": datetime.utcnow().isoformat(),
                },
                **(extra or {})
            }
        )

    @classmethod
    def classify(cls, error: Exception, fallback: str) -> ErrorContext:
        """Map an exception raised by a collaborator call to an error context

        Args:
            error: Exception raised while calling a collaborator
            fallback: Message to use when a rejection carries none

        Returns:
            ErrorContext with the user-facing message
        """
        if isinstance(error, ApiRejection):
            return ErrorContext(
                error_type=ErrorType.REJECTION,
                message=error.message or fallback,
                details=error.details
            )
        if isinstance(error, TransportError):
            return ErrorContext(
                error_type=ErrorType.TRANSPORT,
                message=NETWORK_ERROR,
                details={**error.details, "cause": error.message}
            )
        # Anything else escaped the collaborator unwrapped; the server was not
        # confirmed to have answered, so report it as a transport failure
        return ErrorContext(
            error_type=ErrorType.TRANSPORT,
            message=NETWORK_ERROR,
            details={"cause": str(error), "exception": type(error).__name__}
        )

    @classmethod
    def handle_service_error(cls, error: Exception, component: str, fallback: str) -> TransientStatus:
        """Convert a collaborator failure into an error status for a screen

        Args:
            error: Exception raised by the collaborator
            component: Component that initiated the call
            fallback: Message used when a rejection carries none

        Returns:
            TransientStatus: Error status for the screen
        """
        context = cls.classify(error, fallback)
        cls._log(context, {"component": component})
        return TransientStatus.error(context.message)

    @classmethod
    def handle_validation_error(cls, result: ValidationResult, component: str) -> TransientStatus:
        """Convert a failed local validation into an error status

        Args:
            result: Failed validation result
            component: Component that ran the validation

        Returns:
            TransientStatus: Error status for the screen
        """
        context = ErrorContext(
            error_type=ErrorType.VALIDATION,
            message=result.message,
            details={"field": (result.error or {}).get("field")}
        )
        cls._log(context, {"component": component}, level=logging.INFO)
        return TransientStatus.error(context.message)

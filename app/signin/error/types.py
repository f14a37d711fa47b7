"""Error type definitions and constants

This module defines the core error structures used by the error handling system.
All error types follow a simple, flat structure with clear boundaries.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional


@dataclass
class ValidationResult:
    """Result of UI/component validation

    Attributes:
        valid: Whether validation passed
        error: Optional error details if validation failed
        value: Optional transformed value if validation passed
    """
    valid: bool
    error: Optional[Dict] = None
    value: Optional[Any] = None

    @classmethod
    def success(cls, value: Any = None) -> 'ValidationResult':
        """Create successful validation result"""
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, message: str, field: str = "value", details: Optional[Dict] = None) -> 'ValidationResult':
        """Create validation error result"""
        return cls(
            valid=False,
            error={
                "type": "validation",
                "field": field,
                "message": message,
                **({"details": details} if details else {})
            }
        )

    @property
    def message(self) -> str:
        """User-facing message of a failed validation"""
        return (self.error or {}).get("message", "")


class ErrorType(Enum):
    """Core error types with clear boundaries"""
    VALIDATION = auto()  # Local validation before any network call
    REJECTION = auto()   # Collaborator answered and refused
    TRANSPORT = auto()   # Collaborator could not be reached


@dataclass
class ErrorContext:
    """Standardized error context structure

    Attributes:
        error_type: Type of error
        message: User-facing message
        details: Error-specific context details
    """
    error_type: ErrorType
    message: str
    details: Optional[Dict] = None


# User-facing messages
MISSING_CREDENTIALS = "Please provide both username and password."
MISSING_ACCOUNT_ID = "Login response did not include an account identifier."
GENERIC_AUTH_FAILURE = "An error occurred."
NO_IDENTITY = "No logged-in user found."
INVALID_OTP = "OTP must be a 6-digit number."
OTP_REJECTED = "Failed to save OTP"
NETWORK_ERROR = "Network error. Could not connect to server."

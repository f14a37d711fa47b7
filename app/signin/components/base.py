"""Base component interfaces

Components are the screens' input handlers. Each one validates its own
input locally and tracks its validation attempts for debugging; network
calls and status handling are layered on top by the concrete components.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Type, Union

from signin.error.exceptions import ComponentException
from signin.error.types import ValidationResult

logger = logging.getLogger(__name__)


class Component:
    """Base component interface"""

    def __init__(self, component_type: str):
        """Initialize component with standardized validation tracking"""
        self.type = component_type
        self.value = None
        self.validation_state = {
            "in_progress": False,
            "error": None,
            "attempts": 0,
            "operation": None,
            "component": component_type,
            "timestamp": None
        }

    def validate(self, value: Any) -> ValidationResult:
        """Validate component input with standardized tracking

        Args:
            value: Value to validate

        Returns:
            ValidationResult with validation status

        Raises:
            ComponentException: If the component's validation itself fails
        """
        self.validation_state.update({
            "attempts": self.validation_state["attempts"] + 1,
            "in_progress": True,
            "operation": "validate",
            "timestamp": datetime.utcnow().isoformat()
        })

        try:
            result = self._validate(value)
        except Exception as e:
            self.validation_state.update({
                "in_progress": False,
                "error": str(e),
                "operation": "validate_error"
            })
            raise ComponentException(
                message=str(e),
                component=self.type,
                field="value",
                value=type(value).__name__
            ) from e

        if result.valid:
            self.value = result.value
            self.validation_state.update({
                "in_progress": False,
                "error": None,
                "operation": "update"
            })
        else:
            self.validation_state.update({
                "in_progress": False,
                "error": {
                    "message": result.message,
                    "field": (result.error or {}).get("field"),
                    "attempts": self.validation_state["attempts"]
                }
            })
        return result

    def _validate(self, value: Any) -> ValidationResult:
        """Component-specific validation logic"""
        raise NotImplementedError

    def get_ui_state(self) -> Dict:
        """Get current UI state with validation tracking"""
        return {
            "type": self.type,
            "validation": dict(self.validation_state)
        }


class InputComponent(Component):
    """Base class for input components"""

    def _validate(self, value: Any) -> ValidationResult:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Validating input component {self.type}")
        return self.validate_input(value)

    def validate_input(self, value: Any) -> ValidationResult:
        """Component-specific input validation logic"""
        raise NotImplementedError

    def _validate_type(self, value: Any, expected_type: Union[Type, tuple], type_name: str) -> ValidationResult:
        """Validate value type with proper error context"""
        if not isinstance(value, expected_type):
            return ValidationResult.failure(
                message=f"Value must be {type_name}",
                field="value",
                details={
                    "expected_type": type_name,
                    "actual_type": str(type(value))
                }
            )
        return ValidationResult.success(value)

    def _validate_required(self, value: Any, field: str = "value", message: str = "Value is required") -> ValidationResult:
        """Validate required value with proper error context"""
        if value is None or (isinstance(value, str) and not value):
            return ValidationResult.failure(
                message=message,
                field=field,
                details={"error": "missing_required"}
            )
        return ValidationResult.success(value)

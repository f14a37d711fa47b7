"""Credential form component

Local checks on the username/password draft before it is sent to the
authentication endpoint.
"""

from typing import Any, Optional

from signin.error.types import MISSING_CREDENTIALS, ValidationResult
from signin.flow.constants import MODES
from signin.flow.types import CredentialDraft

from .base import InputComponent


class CredentialsForm(InputComponent):
    """Username/password form with optional register mode"""

    def __init__(self, supports_registration: bool = False):
        super().__init__("credentials_form")
        self.supports_registration = supports_registration

    def validate_input(self, value: Any) -> ValidationResult:
        type_result = self._validate_type(value, CredentialDraft, "credential draft")
        if not type_result.valid:
            return type_result

        for field in ("username", "password"):
            required = self._validate_required(
                getattr(value, field),
                field=field,
                message=MISSING_CREDENTIALS
            )
            if not required.valid:
                return required

        if value.mode not in MODES:
            return ValidationResult.failure(
                message=f"Unknown mode: {value.mode}",
                field="mode"
            )

        return ValidationResult.success(value)

    def request_mode(self, draft: CredentialDraft) -> Optional[str]:
        """Mode to send to the endpoint; None in login-only setups"""
        return draft.mode if self.supports_registration else None

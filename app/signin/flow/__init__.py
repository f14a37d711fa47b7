"""Workflow state machine

The controller lives in signin.flow.controller; this package root only
exposes the plain constants and types so lower layers can import them
without pulling in the controller.
"""

from .constants import LOGIN, OTP_LENGTH, REGISTER, Event, Stage, StatusKind
from .types import AuthResult, CredentialDraft, SessionIdentity, TransientStatus

__all__ = [
    "LOGIN",
    "OTP_LENGTH",
    "REGISTER",
    "Event",
    "Stage",
    "StatusKind",
    "AuthResult",
    "CredentialDraft",
    "SessionIdentity",
    "TransientStatus",
]

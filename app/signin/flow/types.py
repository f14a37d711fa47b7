"""Workflow state types

Transient values held by the workflow while the client runs. Nothing here
survives a restart.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import LOGIN, StatusKind


@dataclass
class CredentialDraft:
    """In-progress values of the credential form"""
    username: str = ""
    password: str = ""
    mode: str = LOGIN
    show_password: bool = False

    def clear(self) -> None:
        """Reset every field to its initial value"""
        self.username = ""
        self.password = ""
        self.mode = LOGIN
        self.show_password = False

    def masked_password(self) -> str:
        if self.show_password:
            return self.password
        return "•" * len(self.password)


@dataclass(frozen=True)
class SessionIdentity:
    """Identifier returned by the authentication endpoint"""
    account_id: str


@dataclass(frozen=True)
class AuthResult:
    """Successful Authenticate response"""
    message: str
    account_id: Optional[str] = None


@dataclass
class TransientStatus:
    """Per-screen status line"""
    kind: StatusKind = StatusKind.NONE
    text: str = ""

    @classmethod
    def error(cls, text: str) -> 'TransientStatus':
        return cls(StatusKind.ERROR, text)

    @classmethod
    def info(cls, text: str) -> 'TransientStatus':
        return cls(StatusKind.INFO, text)

    @property
    def is_error(self) -> bool:
        return self.kind is StatusKind.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "text": self.text}

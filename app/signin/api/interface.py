"""Collaborator interfaces

The workflow only depends on these two contracts; any transport that keeps
their semantics can stand behind them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from signin.flow.types import AuthResult


class AuthServiceInterface(ABC):
    """Authentication endpoint"""

    @abstractmethod
    def authenticate(self, username: str, password: str, mode: Optional[str] = None) -> AuthResult:
        """Authenticate a username/password pair

        Args:
            username: Username from the credential form
            password: Password from the credential form
            mode: "login" or "register"; None in login-only setups

        Returns:
            AuthResult: Status message and account identifier

        Raises:
            ApiRejection: If the endpoint refused the credentials
            TransportError: If the endpoint could not be reached
        """
        pass


class OtpServiceInterface(ABC):
    """OTP submission endpoint"""

    @abstractmethod
    def submit_otp(self, account_id: str, code: str) -> None:
        """Submit a 6-digit code for an account

        Args:
            account_id: Identifier returned by authentication
            code: Joined 6-digit code

        Raises:
            ApiRejection: If the endpoint refused the code
            TransportError: If the endpoint could not be reached
        """
        pass

"""Network collaborators"""

from .auth import AuthService
from .interface import AuthServiceInterface, OtpServiceInterface
from .otp import OtpService

__all__ = [
    "AuthService",
    "AuthServiceInterface",
    "OtpService",
    "OtpServiceInterface",
]

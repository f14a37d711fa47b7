"""Component system

This package provides:
- Base component interfaces
- The credential form
- The OTP entry widget
"""

from .base import Component, InputComponent
from .credentials import CredentialsForm
from .otp_entry import OtpEntryWidget

__all__ = [
    "Component",
    "InputComponent",
    "CredentialsForm",
    "OtpEntryWidget",
]

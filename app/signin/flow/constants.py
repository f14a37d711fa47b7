"""Workflow constants"""

from enum import Enum

# Credential form modes
LOGIN = "login"
REGISTER = "register"
MODES = (LOGIN, REGISTER)

# OTP buffer
OTP_LENGTH = 6
BACKSPACE = "Backspace"


class Stage(Enum):
    """Top-level screen of the workflow"""
    CREDENTIALS = "Credentials"
    AWAITING_OTP = "AwaitingOtp"
    COMPLETED = "Completed"


class Event(Enum):
    """Events that may move the workflow between stages"""
    CREDENTIALS_OK = "credentials_ok"
    OTP_CONFIRMED = "otp_confirmed"
    RESET = "reset"


class StatusKind(Enum):
    NONE = "none"
    ERROR = "error"
    INFO = "info"

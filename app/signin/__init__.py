"""Staff sign-in client

Credential form, one-time-passcode confirmation and completion screen,
driven by a single workflow state machine.
"""

__version__ = "0.1.0"

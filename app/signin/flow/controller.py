"""Workflow controller

Owns which screen is shown and the data carried between screens:
- the credential draft typed into the first screen
- the session identity returned by the authentication endpoint
- the credential screen's status line and submission guard
- the OTP widget mounted while the code is awaited

All methods run on one event loop. Network calls are the only suspension
points; a response that resolves after a reset is dropped.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from signin.api.interface import AuthServiceInterface, OtpServiceInterface
from signin.components.credentials import CredentialsForm
from signin.components.otp_entry import OtpEntryWidget
from signin.error.exceptions import ComponentException, FlowException
from signin.error.handler import ErrorHandler
from signin.error.types import GENERIC_AUTH_FAILURE, MISSING_ACCOUNT_ID
from signin.flow.constants import LOGIN, MODES, REGISTER, Event, Stage
from signin.flow.headquarters import get_next_stage
from signin.flow.types import CredentialDraft, SessionIdentity, TransientStatus

logger = logging.getLogger(__name__)


class WorkflowController:
    """Sign-in workflow state machine"""

    def __init__(
        self,
        auth_service: AuthServiceInterface,
        otp_service: OtpServiceInterface,
        supports_registration: bool = False,
        request_focus: Optional[Callable[[int], None]] = None
    ):
        self.auth_service = auth_service
        self.otp_service = otp_service
        self.supports_registration = supports_registration
        self.request_focus = request_focus

        self.stage = Stage.CREDENTIALS
        self.draft = CredentialDraft()
        self.identity: Optional[SessionIdentity] = None
        self.status = TransientStatus()
        self.is_submitting = False
        self.form = CredentialsForm(supports_registration)
        self.otp_widget: Optional[OtpEntryWidget] = None

        # Bumped on reset so late responses can tell they are stale
        self._epoch = 0

    # Transitions

    def _transition(self, event: Event) -> bool:
        """Apply an event to the current stage

        Returns:
            bool: False if the event is not valid in the current stage
        """
        try:
            next_stage = get_next_stage(self.stage, event)
        except FlowException as e:
            logger.debug(f"Ignoring event: {e.message}")
            return False

        previous = self.stage
        if previous is Stage.AWAITING_OTP and self.otp_widget is not None:
            self.otp_widget.unmount()
            self.otp_widget = None

        self.stage = next_stage
        if next_stage is Stage.AWAITING_OTP:
            self.otp_widget = OtpEntryWidget(
                identity=self.identity,
                on_success=self.handle_otp_confirmed,
                otp_service=self.otp_service,
                request_focus=self.request_focus
            )

        if previous is not next_stage:
            logger.info(f"Stage {previous.value} -> {next_stage.value} ({event.value})")
        return True

    # Credential screen

    def update_username(self, value: str) -> None:
        if self.stage is Stage.CREDENTIALS:
            self.draft.username = value

    def update_password(self, value: str) -> None:
        if self.stage is Stage.CREDENTIALS:
            self.draft.password = value

    def toggle_password_visibility(self) -> None:
        if self.stage is Stage.CREDENTIALS:
            self.draft.show_password = not self.draft.show_password

    def set_mode(self, mode: str) -> bool:
        """Switch the credential form between login and register

        Returns:
            bool: False if the switch is not available
        """
        if mode not in MODES:
            raise ComponentException(
                message=f"Mode must be one of {', '.join(MODES)}",
                component=self.form.type,
                field="mode",
                value=str(mode)
            )
        if not self.supports_registration:
            logger.warning("Registration is not enabled; staying in login mode")
            return False
        if self.stage is not Stage.CREDENTIALS:
            return False

        self.draft.mode = mode
        self.status = TransientStatus()
        return True

    def toggle_mode(self) -> bool:
        return self.set_mode(LOGIN if self.draft.mode == REGISTER else REGISTER)

    async def submit_credentials(self) -> bool:
        """Validate the draft and authenticate it

        Returns:
            bool: True if the workflow moved on to the OTP screen
        """
        if self.stage is not Stage.CREDENTIALS or self.is_submitting:
            logger.debug("Credential submit ignored")
            return False

        self.status = TransientStatus()
        result = self.form.validate(self.draft)
        if not result.valid:
            self.status = ErrorHandler.handle_validation_error(result, self.form.type)
            return False

        epoch = self._epoch
        username = self.draft.username
        password = self.draft.password
        mode = self.form.request_mode(self.draft)

        self.is_submitting = True
        try:
            auth = await asyncio.to_thread(self.auth_service.authenticate, username, password, mode)
        except Exception as e:
            if epoch != self._epoch:
                logger.info("Authentication response arrived after reset")
                return False
            self.status = ErrorHandler.handle_service_error(e, self.form.type, GENERIC_AUTH_FAILURE)
            return False
        finally:
            # Only one request can be outstanding, so this one owns the guard
            self.is_submitting = False

        if epoch != self._epoch:
            logger.info("Authentication response arrived after reset")
            return False

        if not auth.account_id:
            logger.error("Authentication succeeded without an account identifier")
            self.status = TransientStatus.error(MISSING_ACCOUNT_ID)
            return False

        self.identity = SessionIdentity(account_id=auth.account_id)
        self.draft.clear()
        self.status = TransientStatus.info(auth.message)
        return self._transition(Event.CREDENTIALS_OK)

    # OTP screen

    def handle_otp_confirmed(self) -> None:
        """Success callback handed to the OTP widget"""
        self._transition(Event.OTP_CONFIRMED)

    # Any screen

    def reset(self) -> None:
        """Return to an empty credential screen"""
        self._epoch += 1
        self.draft.clear()
        self.identity = None
        self.status = TransientStatus()
        self._transition(Event.RESET)

    def snapshot(self) -> Dict[str, Any]:
        """Plain view of the current state; never includes the password"""
        return {
            "stage": self.stage.value,
            "draft": {
                "username": self.draft.username,
                "mode": self.draft.mode,
                "password_set": bool(self.draft.password),
                "show_password": self.draft.show_password
            },
            "identity": self.identity.account_id if self.identity else None,
            "status": self.status.to_dict(),
            "is_submitting": self.is_submitting,
            "otp": self.otp_widget.get_ui_state() if self.otp_widget else None
        }

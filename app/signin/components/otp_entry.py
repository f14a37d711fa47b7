"""OTP entry widget

Six single-character slots that only take decimal digits. Typing a digit
moves focus forward, backspace on an empty slot moves it back. On submit the
joined code is checked locally and then sent to the OTP endpoint; acceptance
is reported to the owner through a zero-argument callback.

Focus is a side effect the widget requests through an optional
``request_focus(index)`` capability supplied by whatever renders the slots.
"""

import asyncio
import logging
import re
from typing import Any, Callable, Optional, Tuple

from signin.api.interface import OtpServiceInterface
from signin.error.exceptions import ComponentException
from signin.error.handler import ErrorHandler
from signin.error.types import INVALID_OTP, NO_IDENTITY, OTP_REJECTED, ValidationResult
from signin.flow.constants import BACKSPACE, OTP_LENGTH
from signin.flow.types import SessionIdentity, TransientStatus

from .base import InputComponent

logger = logging.getLogger(__name__)

# ASCII only; str.isdigit() would also accept other scripts' digits
SLOT_INPUT = re.compile(r"[0-9]*")
OTP_CODE = re.compile(r"[0-9]{%d}" % OTP_LENGTH)


class OtpEntryWidget(InputComponent):
    """Segmented 6-digit code entry with auto-advance focus"""

    def __init__(
        self,
        identity: Optional[SessionIdentity],
        on_success: Callable[[], None],
        otp_service: OtpServiceInterface,
        request_focus: Optional[Callable[[int], None]] = None
    ):
        super().__init__("otp_entry")
        self.identity = identity
        self.on_success = on_success
        self.otp_service = otp_service
        self.request_focus = request_focus
        self.mount()

    def mount(self) -> None:
        """(Re)mount the widget with an empty buffer"""
        self._digits = [""] * OTP_LENGTH
        self.status = TransientStatus()
        self.is_submitting = False
        self.mounted = True
        self.confirmed = False
        self.focused_index = 0
        self._focus(0)

    def unmount(self) -> None:
        """Tear the widget down; late responses are ignored afterwards"""
        self.mounted = False

    @property
    def slots(self) -> Tuple[str, ...]:
        """Read-only view of the slots for rendering"""
        return tuple(self._digits)

    def _focus(self, index: int) -> None:
        self.focused_index = index
        if self.request_focus:
            self.request_focus(index)

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or not 0 <= index < OTP_LENGTH:
            raise ComponentException(
                message=f"Slot index must be between 0 and {OTP_LENGTH - 1}",
                component=self.type,
                field="index",
                value=str(index)
            )

    def change(self, index: int, value: str) -> bool:
        """Apply the new raw text of a slot

        Args:
            index: Slot that was edited
            value: Full text of the slot after the edit (may hold several
                characters after a paste or fast typing)

        Returns:
            bool: False if the edit was rejected
        """
        self._check_index(index)
        if not SLOT_INPUT.fullmatch(value):
            return False

        # Keep only the most recently typed character
        self._digits[index] = value[-1:]

        if self._digits[index] and index < OTP_LENGTH - 1:
            self._focus(index + 1)
        return True

    def key_down(self, index: int, key: str) -> None:
        """Handle a key press on a slot before its value changes"""
        self._check_index(index)
        if key == BACKSPACE and not self._digits[index] and index > 0:
            self._focus(index - 1)

    def type_text(self, text: str) -> int:
        """Type characters into the focused slot one at a time

        Returns:
            int: Number of characters accepted
        """
        accepted = 0
        for char in text:
            index = self.focused_index
            if self.change(index, self._digits[index] + char):
                accepted += 1
        return accepted

    def backspace(self) -> None:
        """Press backspace on the focused slot"""
        index = self.focused_index
        was_empty = not self._digits[index]
        self.key_down(index, BACKSPACE)
        if not was_empty:
            self.change(index, "")

    def validate_input(self, value: Any) -> ValidationResult:
        if self.identity is None:
            return ValidationResult.failure(message=NO_IDENTITY, field="identity")

        if not isinstance(value, str) or not OTP_CODE.fullmatch(value):
            return ValidationResult.failure(
                message=INVALID_OTP,
                field="otp",
                details={"length": len(value) if isinstance(value, str) else None}
            )
        return ValidationResult.success(value)

    async def submit(self) -> bool:
        """Validate the buffer and send it to the OTP endpoint

        Returns:
            bool: True if the endpoint accepted the code
        """
        if self.is_submitting or not self.mounted or self.confirmed:
            logger.debug("OTP submit ignored")
            return False

        self.status = TransientStatus()
        code = "".join(self._digits)
        result = self.validate(code)
        if not result.valid:
            self.status = ErrorHandler.handle_validation_error(result, self.type)
            return False

        self.is_submitting = True
        try:
            await asyncio.to_thread(self.otp_service.submit_otp, self.identity.account_id, code)
        except Exception as e:
            if not self.mounted:
                logger.info("OTP response arrived after the widget was unmounted")
                return False
            # Buffer stays as typed so single digits can be corrected
            self.status = ErrorHandler.handle_service_error(e, self.type, OTP_REJECTED)
            return False
        finally:
            self.is_submitting = False

        if not self.mounted:
            logger.info("OTP response arrived after the widget was unmounted")
            return False

        self.confirmed = True
        self.on_success()
        return True

    def get_ui_state(self):
        return {
            **super().get_ui_state(),
            "slots": list(self._digits),
            "focused_index": self.focused_index,
            "status": self.status.to_dict(),
            "is_submitting": self.is_submitting
        }

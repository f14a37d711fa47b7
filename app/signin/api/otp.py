"""OTP submission collaborator over HTTP"""

import logging

from signin.config.settings import Settings

from .base import make_api_request, process_api_response
from .interface import OtpServiceInterface

logger = logging.getLogger(__name__)


class OtpService(OtpServiceInterface):
    """Calls the save-otp endpoint"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def submit_otp(self, account_id: str, code: str) -> None:
        logger.info("Submitting OTP")
        response = make_api_request(
            "save-otp",
            {"otp": code, "username": account_id},
            self.settings,
            service="otp"
        )
        # Acceptance needs no payload beyond the status code
        process_api_response(response, service="otp", action="save-otp", require_body=False)
        logger.info("OTP accepted")

"""Authentication collaborator over HTTP"""

import logging
from typing import Optional

from signin.config.settings import Settings
from signin.flow.constants import REGISTER
from signin.flow.types import AuthResult

from .base import make_api_request, process_api_response
from .interface import AuthServiceInterface

logger = logging.getLogger(__name__)

# Response keys that may carry the account identifier
ACCOUNT_ID_KEYS = ("username", "accountId", "account_id")


class AuthService(AuthServiceInterface):
    """Calls the login or register endpoint"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def authenticate(self, username: str, password: str, mode: Optional[str] = None) -> AuthResult:
        endpoint = "register" if mode == REGISTER else "login"
        logger.info(f"Attempting to {endpoint}")

        response = make_api_request(
            endpoint,
            {"username": username, "password": password},
            self.settings,
            service="auth"
        )
        data = process_api_response(response, service="auth", action=endpoint)

        account_id = None
        for key in ACCOUNT_ID_KEYS:
            if data.get(key):
                account_id = str(data[key])
                break

        if account_id is None:
            logger.warning(f"{endpoint} response did not include an account identifier")
        else:
            logger.info(f"{endpoint} successful")
        return AuthResult(message=str(data.get("message", "")), account_id=account_id)

"""Base API functionality using pure functions

Every collaborator call is one POST with a JSON body. Responses are sorted
into three outcomes:
- 2xx with a JSON object body: returned to the caller
- any other status: ApiRejection carrying the body's message
- no usable answer at all: TransportError
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.exceptions import RequestException

from signin.config.settings import Settings
from signin.error.exceptions import ApiRejection, TransportError

logger = logging.getLogger(__name__)

# Payload keys never written to the log
SENSITIVE_KEYS = ("password", "otp")


def get_headers(settings: Settings) -> Dict[str, str]:
    """Get request headers

    Args:
        settings: Client settings

    Returns:
        Dict[str, str]: Headers with the client API key when configured
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    if settings.client_api_key:
        headers["x-client-api-key"] = settings.client_api_key
    return headers


def redact(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a payload that is safe to log"""
    return {
        key: ("***" if key in SENSITIVE_KEYS else value)
        for key, value in payload.items()
    }


def make_api_request(
    endpoint: str,
    payload: Dict[str, Any],
    settings: Settings,
    service: str,
    method: str = "POST"
) -> requests.Response:
    """Make an API request with proper logging and error handling

    Args:
        endpoint: Endpoint name relative to the API base URL (e.g. "login")
        payload: JSON body
        settings: Client settings
        service: Collaborator name used in error details
        method: HTTP method

    Returns:
        requests.Response: Raw response

    Raises:
        TransportError: If the request could not complete
    """
    url = settings.endpoint(endpoint)
    logger.info(f"Sending API request to: {url}")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Payload: {redact(payload)}")

    try:
        response = requests.request(
            method,
            url,
            headers=get_headers(settings),
            json=payload,
            timeout=settings.api_timeout
        )
    except RequestException as e:
        logger.warning(f"Request to {url} failed: {str(e)}")
        raise TransportError(
            message=str(e),
            service=service,
            action=endpoint
        ) from e

    logger.info(f"API Response Status Code: {response.status_code}")
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"API Response Content: {response.text[:500]}...")
    return response


def _decode_body(response: requests.Response) -> Optional[Dict[str, Any]]:
    """Decode a JSON object body, None if absent or malformed"""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def error_message(data: Optional[Dict[str, Any]]) -> str:
    """Extract a human-readable message from an error body"""
    if not data:
        return ""
    message = data.get("message") or data.get("error") or ""
    if isinstance(message, dict):
        message = message.get("message", "")
    return str(message)


def process_api_response(
    response: requests.Response,
    service: str,
    action: str,
    require_body: bool = True
) -> Dict[str, Any]:
    """Process API response into data or a raised failure

    Args:
        response: Raw response
        service: Collaborator name used in error details
        action: Endpoint name used in error details
        require_body: Whether a 2xx response must carry a JSON object

    Returns:
        Dict[str, Any]: Decoded body (empty when not required and absent)

    Raises:
        ApiRejection: If the endpoint answered with a non-2xx status
        TransportError: If a required body is missing or malformed
    """
    data = _decode_body(response)

    if not response.ok:
        message = error_message(data)
        logger.info(f"{service} rejected {action} (status code: {response.status_code})")
        raise ApiRejection(
            message=message,
            service=service,
            action=action,
            status_code=response.status_code
        )

    if data is None:
        if require_body:
            raise TransportError(
                message=f"Unreadable response body (status code: {response.status_code})",
                service=service,
                action=action
            )
        return {}
    return data

"""Core exceptions with clear error boundaries

This module defines the base exceptions used throughout the client.
Each exception maps to a specific error type:
- component: local validation inside a screen
- flow: invalid workflow transitions
- system: configuration and collaborator failures
"""

from typing import Dict, Optional


class BaseException(Exception):
    """Base exception with error details"""
    def __init__(self, message: str, details: Optional[Dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ComponentException(BaseException):
    """Component misuse errors"""
    def __init__(
        self,
        message: str,
        component: str,
        field: str,
        value: str
    ):
        details = {
            "component": component,
            "field": field,
            "value": value
        }
        super().__init__(message, details)


class FlowException(BaseException):
    """Workflow errors"""
    def __init__(
        self,
        message: str,
        stage: str,
        event: str
    ):
        details = {
            "stage": stage,
            "event": event
        }
        super().__init__(message, details)


class SystemException(BaseException):
    """System technical errors"""
    def __init__(
        self,
        message: str,
        code: str,
        service: str,
        action: str
    ):
        details = {
            "code": code,
            "service": service,
            "action": action
        }
        super().__init__(message, details)


class ConfigurationException(SystemException):
    """System configuration errors"""
    pass


class ServiceException(SystemException):
    """External service errors"""
    pass


class ApiRejection(ServiceException):
    """The endpoint answered but refused the request"""
    def __init__(self, message: str, service: str, action: str, status_code: Optional[int] = None):
        super().__init__(message, code="API_REJECTED", service=service, action=action)
        self.status_code = status_code
        self.details["status_code"] = status_code


class TransportError(ServiceException):
    """The endpoint could not be reached or did not answer intelligibly"""
    def __init__(self, message: str, service: str, action: str):
        super().__init__(message, code="TRANSPORT_ERROR", service=service, action=action)

"""
Service layer custom exceptions.

Upstream (Riot API) failures live in ``core.riot_api.errors``; the classes here
cover problems detected before any upstream call is made.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class ValidationError(ServiceException):
    """User-correctable input error (malformed Riot ID, missing player)."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(message=message, context=validation_context)
        self.field = field


class ConfigurationError(ServiceException):
    """Operator-correctable error, e.g. a missing Riot API key."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message=message, context={"setting": setting} if setting else None
        )
        self.setting = setting

"""
Custom exceptions for the auth core.
"""

from typing import Dict, Optional

from .constants import (
    EMAIL_FIELD,
    PASSWORD_FIELD,
    USER_NOT_FOUND,
    INCORRECT_PASSWORD,
    FORM_ERROR_KEY,
    STORAGE_FAILED,
)


class AuthError(Exception):
    """Base exception for auth errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def errors(self) -> Dict[str, str]:
        """Field-keyed messages to show for this error."""
        return {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class FieldError(AuthError):
    """An error reported against a single form field."""

    field: str = ""

    @property
    def errors(self) -> Dict[str, str]:
        return {self.field: self.message}


class ValidationError(AuthError):
    """Exception raised when a submitted form fails validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Form validation failed", dict(errors))
        self._errors = dict(errors)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)


class UserNotFound(FieldError):
    """Exception raised when no account matches the login email."""

    field = EMAIL_FIELD

    def __init__(self, email: Optional[str] = None):
        super().__init__(USER_NOT_FOUND, {"email": email} if email else None)


class BadCredentials(FieldError):
    """Exception raised when the password does not match the account."""

    field = PASSWORD_FIELD

    def __init__(self):
        super().__init__(INCORRECT_PASSWORD)


class StorageError(FieldError):
    """Exception raised when the durable store cannot be written."""

    field = FORM_ERROR_KEY

    def __init__(self, path: str, reason: str):
        super().__init__(STORAGE_FAILED, {"path": path, "reason": reason})


class CorruptPersistedState(AuthError):
    """Exception raised for persisted data that cannot be decoded."""
    pass

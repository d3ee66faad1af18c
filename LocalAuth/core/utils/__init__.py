"""
Utility constants and the exception taxonomy shared by the auth core.
"""

from .constants import (
    EMAIL_FIELD,
    PASSWORD_FIELD,
    CONFIRM_PASSWORD_FIELD,
    USERNAME_FIELD,
    RESET_EMAIL_FIELD,
    FORM_ERROR_KEY,
    FORM_FIELDS,
    STORAGE_FAILED,
)
from .exceptions import (
    AuthError,
    ValidationError,
    UserNotFound,
    BadCredentials,
    CorruptPersistedState,
    StorageError,
)

__all__ = [
    'AuthError',
    'ValidationError',
    'UserNotFound',
    'BadCredentials',
    'CorruptPersistedState',
    'StorageError',
    'EMAIL_FIELD',
    'PASSWORD_FIELD',
    'CONFIRM_PASSWORD_FIELD',
    'USERNAME_FIELD',
    'RESET_EMAIL_FIELD',
    'FORM_ERROR_KEY',
    'FORM_FIELDS',
    'STORAGE_FAILED',
]

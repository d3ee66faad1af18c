"""
Form validation rules.

All checks that apply to the active screen run on every pass and their
messages are returned together; an empty map means the form is valid.
"""
import re
from typing import Optional

from LocalAuth.config import config
from LocalAuth.core.utils import (
    ValidationError,
    EMAIL_FIELD,
    PASSWORD_FIELD,
    CONFIRM_PASSWORD_FIELD,
    USERNAME_FIELD,
    RESET_EMAIL_FIELD,
)
from LocalAuth.core.utils import constants
from .models import ErrorMap, FormState, Screen

# local@domain.tld anywhere in the value
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def check_email(email: str) -> Optional[str]:
    """Return the message for an unusable email, or None."""
    if not email:
        return constants.EMAIL_REQUIRED
    if not EMAIL_PATTERN.search(email):
        return constants.EMAIL_INVALID
    return None


def check_password(password: str, min_length: int = None) -> Optional[str]:
    """Return the message for an unusable password, or None."""
    if min_length is None:
        min_length = config.MIN_PASSWORD_LENGTH
    if not password:
        return constants.PASSWORD_REQUIRED
    if len(password) < min_length:
        return constants.PASSWORD_TOO_SHORT.format(min_length=min_length)
    return None


def validate(screen: Screen, form: FormState) -> ErrorMap:
    """
    Validate the fields used by ``screen``.

    Args:
        screen: Active screen; confirmation and full name are register-only
        form: Current input values

    Returns:
        A fresh ErrorMap keyed by field name
    """
    errors: ErrorMap = {}

    message = check_email(form.email)
    if message:
        errors[EMAIL_FIELD] = message

    message = check_password(form.password)
    if message:
        errors[PASSWORD_FIELD] = message

    if screen is Screen.REGISTER:
        if form.password != form.confirm_password:
            errors[CONFIRM_PASSWORD_FIELD] = constants.PASSWORDS_MISMATCH
        if not form.username:
            errors[USERNAME_FIELD] = constants.USERNAME_REQUIRED

    return errors


def validate_reset_email(email: str) -> ErrorMap:
    """Validate the reset form; reports only the first failing check."""
    message = check_email(email)
    return {RESET_EMAIL_FIELD: message} if message else {}


def ensure_valid(screen: Screen, form: FormState) -> None:
    """
    Raise if ``form`` is not acceptable for ``screen``.

    Raises:
        ValidationError: carrying the full ErrorMap
    """
    errors = validate(screen, form)
    if errors:
        raise ValidationError(errors)

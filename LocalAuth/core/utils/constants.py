"""
Field names and user-facing messages for the auth forms.
"""

# Form field names (as exposed to the presentation layer)
EMAIL_FIELD = "email"
PASSWORD_FIELD = "password"
CONFIRM_PASSWORD_FIELD = "confirmPassword"
USERNAME_FIELD = "username"
RESET_EMAIL_FIELD = "resetEmail"

FORM_FIELDS = (
    EMAIL_FIELD,
    PASSWORD_FIELD,
    CONFIRM_PASSWORD_FIELD,
    USERNAME_FIELD,
    RESET_EMAIL_FIELD,
)

# Validation messages
EMAIL_REQUIRED = "Email is required"
EMAIL_INVALID = "Invalid email format"
PASSWORD_REQUIRED = "Password is required"
PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters"
PASSWORDS_MISMATCH = "Passwords do not match"
USERNAME_REQUIRED = "Full name is required"

# Login messages
USER_NOT_FOUND = "No user found with this email"
INCORRECT_PASSWORD = "Incorrect password"

# Storage failures are reported under this key
FORM_ERROR_KEY = "form"
STORAGE_FAILED = "Could not save your changes. Please try again."

"""
Configuration module for LocalAuth application.
Stores all application settings.
"""

import os
from typing import Any, Dict, Optional


class Config:
    """Application configuration class."""

    # Environment profile (development, production, testing)
    ENV = os.environ.get("LOCALAUTH_ENV", "development")
    # Profile for the interactive menus, which share the console
    INTERACTIVE_ENV = os.environ.get("LOCALAUTH_ENV", "production")

    # Durable store
    STORE_FILE = os.environ.get("LOCALAUTH_STORE", "localauth_store.json")
    USERS_KEY = "users"
    CURRENT_USER_KEY = "currentUser"

    # Validation rules
    MIN_PASSWORD_LENGTH = 6

    # Seconds before a sent reset request returns to the login screen
    RESET_REDIRECT_DELAY = float(os.environ.get("LOCALAUTH_RESET_DELAY", "3.0"))

    @classmethod
    def logging_env(cls, command: str, requested: Optional[str] = None) -> str:
        """Logging profile for a CLI command; an explicit request wins."""
        if requested:
            return requested
        return cls.INTERACTIVE_ENV if command == "run" else cls.ENV

    @classmethod
    def get_config(cls) -> Dict[str, Any]:
        """Get all configuration values as a dictionary."""
        return {
            "ENV": cls.ENV,
            "INTERACTIVE_ENV": cls.INTERACTIVE_ENV,
            "STORE_FILE": cls.STORE_FILE,
            "USERS_KEY": cls.USERS_KEY,
            "CURRENT_USER_KEY": cls.CURRENT_USER_KEY,
            "MIN_PASSWORD_LENGTH": cls.MIN_PASSWORD_LENGTH,
            "RESET_REDIRECT_DELAY": cls.RESET_REDIRECT_DELAY,
        }


# Create config instance
config = Config()

"""
Authentication core: validation, credential store, session state machine,
screen navigation and the simulated reset flow.
"""

from .models import AuthState, ErrorMap, FormState, Screen, UserRecord
from .navigator import ScreenNavigator
from .reset import ResetRequestFlow
from .session import AppContext, SessionController, create_app_context
from .store import (
    CredentialStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    deserialize_users,
    find_by_email,
    serialize_users,
)
from .system import AuthSystem
from .validation import validate, validate_reset_email

__all__ = [
    'AppContext',
    'AuthState',
    'AuthSystem',
    'CredentialStore',
    'ErrorMap',
    'FormState',
    'JsonFileKeyValueStore',
    'KeyValueStore',
    'MemoryKeyValueStore',
    'ResetRequestFlow',
    'Screen',
    'ScreenNavigator',
    'SessionController',
    'UserRecord',
    'create_app_context',
    'deserialize_users',
    'find_by_email',
    'serialize_users',
    'validate',
    'validate_reset_email',
]

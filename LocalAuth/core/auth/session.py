"""
Session controller: the Anonymous / Authenticated state machine.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from LocalAuth.config import Config, config as default_config
from LocalAuth.core.utils import BadCredentials, StorageError, UserNotFound
from .models import AuthState, FormState, Screen, UserRecord
from .store import CredentialStore, KeyValueStore, MemoryKeyValueStore
from .validation import ensure_valid

logger = logging.getLogger(__name__)

LoginCallback = Callable[[UserRecord], None]


class SessionController:
    """
    Owns who is logged in.

    ``on_login`` is invoked once per successful ``login`` or ``register``,
    never when a persisted session is restored.
    """

    def __init__(self, credentials: CredentialStore, on_login: Optional[LoginCallback] = None):
        self._credentials = credentials
        self._on_login = on_login
        self._user: Optional[UserRecord] = None

    @property
    def state(self) -> AuthState:
        return AuthState.AUTHENTICATED if self._user is not None else AuthState.ANONYMOUS

    @property
    def current_user(self) -> Optional[UserRecord]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def restore(self) -> Optional[UserRecord]:
        """Adopt the persisted session, if there is a readable one."""
        user = self._credentials.load_session()
        if user is not None:
            self._user = user
            logger.info("Restored session for %s", user.email)
        return user

    def login(self, email: str, password: str) -> UserRecord:
        """
        Authenticate against the registered accounts.

        Raises:
            UserNotFound: no account has this email
            BadCredentials: the password does not match
        """
        user = self._credentials.find_by_email(email)
        if user is None:
            logger.info("Login failed: no user %s", email)
            raise UserNotFound(email)
        if user.password != password:
            logger.info("Login failed: wrong password for %s", email)
            raise BadCredentials()

        self._credentials.persist_session(user)
        self._user = user
        logger.info("User logged in: %s", email)
        self._notify(user)
        return user

    def register(self, form: FormState) -> UserRecord:
        """
        Create an account from a register form and log it in.

        Raises:
            ValidationError: the form does not pass register validation
        """
        ensure_valid(Screen.REGISTER, form)
        user = self._credentials.register(form.email, form.password, form.username)
        self._user = user
        self._notify(user)
        return user

    def logout(self) -> None:
        """End the session; it ends in memory even if the store cannot be written."""
        try:
            self._credentials.clear_session()
        except StorageError:
            logger.error("Persisted session could not be cleared; logging out in memory only")
        if self._user is not None:
            logger.info("User logged out: %s", self._user.email)
        self._user = None

    def _notify(self, user: UserRecord) -> None:
        if self._on_login is None:
            return
        try:
            self._on_login(user)
        except Exception:
            logger.exception("onLogin callback failed for %s", user.email)


@dataclass
class AppContext:
    """Explicit application state handed to the front end."""
    credentials: CredentialStore
    session: SessionController
    config: Config = field(default=default_config)


def create_app_context(store: Optional[KeyValueStore] = None,
                       on_login: Optional[LoginCallback] = None,
                       config: Optional[Config] = None) -> AppContext:
    """
    Build the credential store and session controller, restoring any
    persisted session.
    """
    config = config or default_config
    credentials = CredentialStore(
        store if store is not None else MemoryKeyValueStore(),
        users_key=config.USERS_KEY,
        session_key=config.CURRENT_USER_KEY,
    )
    session = SessionController(credentials, on_login)
    session.restore()
    return AppContext(credentials=credentials, session=session, config=config)

"""
AuthSystem: the presentation-facing facade over the auth core.

A presentation layer reads ``screen``, ``form``, ``errors`` and friends,
and reports field edits, submits and navigation back in.
"""
import asyncio
import logging
from typing import Dict, Optional

from LocalAuth.config import Config
from LocalAuth.core.utils import AuthError, RESET_EMAIL_FIELD
from .models import ErrorMap, FormState, Screen, UserRecord
from .navigator import ScreenNavigator
from .reset import ResetRequestFlow
from .session import AppContext, LoginCallback, create_app_context
from .store import KeyValueStore
from .validation import validate

logger = logging.getLogger(__name__)


class AuthSystem:
    """Login / register / forgot-password front end state."""

    def __init__(self, context: AppContext, navigator: Optional[ScreenNavigator] = None,
                 reset_flow: Optional[ResetRequestFlow] = None):
        self._context = context
        self._navigator = navigator or ScreenNavigator()
        self._reset_flow = reset_flow or ResetRequestFlow(
            self._navigator, delay=context.config.RESET_REDIRECT_DELAY
        )
        self.form = FormState()
        self._errors: ErrorMap = {}
        self.show_password = False

    @classmethod
    def create(cls, store: Optional[KeyValueStore] = None,
               on_login: Optional[LoginCallback] = None,
               config: Optional[Config] = None,
               loop: Optional[asyncio.AbstractEventLoop] = None,
               reset_delay: Optional[float] = None) -> 'AuthSystem':
        """
        Wire a complete front end, restoring any persisted session.

        Args:
            store: Durable key/value store (in-memory when omitted)
            on_login: Called with the user after each successful login or registration
            config: Configuration (module default when omitted)
            loop: Event loop for the reset timer (running or private loop when omitted)
            reset_delay: Override for the reset return delay in seconds
        """
        context = create_app_context(store, on_login, config)
        navigator = ScreenNavigator()
        delay = context.config.RESET_REDIRECT_DELAY if reset_delay is None else reset_delay
        reset_flow = ResetRequestFlow(navigator, delay=delay, loop=loop)
        return cls(context, navigator, reset_flow)

    # -- observable state -------------------------------------------------

    @property
    def context(self) -> AppContext:
        return self._context

    @property
    def navigator(self) -> ScreenNavigator:
        return self._navigator

    @property
    def reset_flow(self) -> ResetRequestFlow:
        return self._reset_flow

    @property
    def screen(self) -> Screen:
        return self._navigator.screen

    @property
    def focused_field(self) -> Optional[str]:
        return self._navigator.focused_field

    @property
    def errors(self) -> ErrorMap:
        return dict(self._errors)

    @property
    def reset_sent(self) -> bool:
        return self._reset_flow.sent

    @property
    def current_user(self) -> Optional[UserRecord]:
        return self._context.session.current_user

    @property
    def is_authenticated(self) -> bool:
        return self._context.session.is_authenticated

    def snapshot(self) -> Dict[str, object]:
        """Everything a renderer needs, as plain values."""
        user = self.current_user
        return {
            "screen": self.screen.value,
            "form": self.form.to_dict(),
            "errors": self.errors,
            "showPassword": self.show_password,
            "resetSent": self.reset_sent,
            "authenticated": self.is_authenticated,
            "currentUser": user.to_dict() if user else None,
        }

    # -- input events -----------------------------------------------------

    def change_field(self, name: str, value: str) -> None:
        """
        Record an edit to one field.

        Editing the reset email clears every error; editing any other field
        clears only that field's error.
        """
        self.form.set(name, value)
        if name == RESET_EMAIL_FIELD:
            self._errors = {}
        elif name in self._errors:
            del self._errors[name]

    def toggle_password_visibility(self) -> bool:
        self.show_password = not self.show_password
        return self.show_password

    def show_login(self) -> None:
        self._navigator.show_login()

    def show_register(self) -> None:
        self._navigator.show_register()

    def show_forgot_password(self) -> None:
        self._navigator.show_forgot_password()

    def submit(self) -> bool:
        """Submit the form of the active screen."""
        screen = self.screen
        match screen:
            case Screen.LOGIN:
                accepted = self.submit_login()
            case Screen.REGISTER:
                accepted = self.submit_register()
            case Screen.FORGOT_PASSWORD:
                accepted = self.submit_reset()
        if not accepted:
            logger.debug("Submit on %s rejected: %s", screen.value, sorted(self._errors))
        return accepted

    def submit_login(self) -> bool:
        self._errors = validate(Screen.LOGIN, self.form)
        if self._errors:
            return False
        try:
            self._context.session.login(self.form.email, self.form.password)
        except AuthError as e:
            self._errors = e.errors
            return False
        return True

    def submit_register(self) -> bool:
        self._errors = validate(Screen.REGISTER, self.form)
        if self._errors:
            return False
        try:
            self._context.session.register(self.form)
        except AuthError as e:
            self._errors = e.errors
            return False
        return True

    def submit_reset(self) -> bool:
        self._errors = self._reset_flow.request_reset(self.form.reset_email)
        return not self._errors

    def logout(self) -> None:
        """End the session and return to a blank login screen."""
        self._context.session.logout()
        self._reset_flow.cancel()
        self.form.clear()
        self._errors = {}
        self.show_password = False
        self._navigator.show_login()

    def close(self) -> None:
        """Tear down; cancels the pending reset return."""
        self._reset_flow.close()

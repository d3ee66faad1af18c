"""
Simulated password-reset request.

Nothing is sent and nothing is stored: a valid request raises the ``sent``
flag and schedules a one-shot return to the login screen on the event loop.
"""
import asyncio
import logging
from typing import Optional

from LocalAuth.config import config
from .models import ErrorMap, Screen
from .navigator import ScreenNavigator
from .validation import validate_reset_email

logger = logging.getLogger(__name__)


class ResetRequestFlow:
    """
    Reset-request state plus its cancellable return timer.

    Leaving the forgot-password screen before the timer fires cancels it,
    so a stale timer can never pull the user back to login.
    """

    def __init__(self, navigator: ScreenNavigator, delay: Optional[float] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Args:
            navigator: Screen navigator to return to login through
            delay: Seconds before the automatic return (default from config)
            loop: Event loop for the timer. Defaults to the running loop, or to a
                private loop the host can drive (see ``loop``) when none is running.
        """
        self._navigator = navigator
        self._delay = config.RESET_REDIRECT_DELAY if delay is None else delay
        self._owns_loop = False
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = asyncio.new_event_loop()
                self._owns_loop = True
                logger.debug("No running event loop; reset timer uses a private loop")
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self.sent = False
        navigator.add_listener(self._on_navigate)

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """Loop the automatic return is scheduled on."""
        return self._loop

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while the automatic return is scheduled."""
        return self._handle is not None

    def request_reset(self, email: str) -> ErrorMap:
        """
        Validate ``email`` and, if usable, mark the request as sent.

        Returns:
            Empty map on success, otherwise ``{"resetEmail": message}``
        """
        errors = validate_reset_email(email)
        if errors:
            return errors

        self.cancel()
        self.sent = True
        self._handle = self._loop.call_later(self._delay, self._complete)
        logger.info("Password reset requested for %s; returning to login in %.1fs", email, self._delay)
        return {}

    def cancel(self) -> None:
        """Drop any scheduled return and lower the sent flag."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending reset return")
        self.sent = False

    def close(self) -> None:
        """Cancel any pending return and release a private loop."""
        self.cancel()
        if self._owns_loop and not self._loop.is_closed():
            self._loop.close()

    def _complete(self) -> None:
        self._handle = None
        self.sent = False
        if self._navigator.screen is Screen.FORGOT_PASSWORD:
            self._navigator.show_login()

    def _on_navigate(self, previous: Screen, current: Screen) -> None:
        if current is not Screen.FORGOT_PASSWORD:
            self.cancel()

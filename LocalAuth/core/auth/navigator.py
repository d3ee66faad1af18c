"""
Screen navigator: which form is shown.
"""
import logging
from typing import Callable, List, Optional

from LocalAuth.core.utils import RESET_EMAIL_FIELD
from .models import Screen

logger = logging.getLogger(__name__)

ScreenListener = Callable[[Screen, Screen], None]


class ScreenNavigator:
    """
    Holds the active screen and notifies listeners on change.

    Entering the forgot-password screen moves focus to its email field.
    """

    def __init__(self, on_focus: Optional[Callable[[str], None]] = None,
                 initial: Screen = Screen.LOGIN):
        self._screen = initial
        self._on_focus = on_focus
        self._listeners: List[ScreenListener] = []
        self.focused_field: Optional[str] = None

    @property
    def screen(self) -> Screen:
        return self._screen

    def add_listener(self, listener: ScreenListener) -> None:
        """Call ``listener(previous, current)`` after every navigation."""
        self._listeners.append(listener)

    def navigate(self, screen: Screen) -> None:
        previous = self._screen
        self._screen = screen
        logger.debug("Screen %s -> %s", previous.value, screen.value)

        if screen is Screen.FORGOT_PASSWORD:
            self.focused_field = RESET_EMAIL_FIELD
            if self._on_focus is not None:
                self._on_focus(RESET_EMAIL_FIELD)
        else:
            self.focused_field = None

        for listener in list(self._listeners):
            listener(previous, screen)

    def show_login(self) -> None:
        self.navigate(Screen.LOGIN)

    def show_register(self) -> None:
        self.navigate(Screen.REGISTER)

    def show_forgot_password(self) -> None:
        self.navigate(Screen.FORGOT_PASSWORD)

"""
Terminal front end for the auth system.
Presents the login, register and forgot-password screens as menus.
"""

import asyncio
import getpass
from typing import Callable, List, Optional

from LocalAuth.core.auth import AuthSystem, Screen
from LocalAuth.core.utils import (
    EMAIL_FIELD,
    PASSWORD_FIELD,
    CONFIRM_PASSWORD_FIELD,
    USERNAME_FIELD,
    RESET_EMAIL_FIELD,
    FORM_ERROR_KEY,
)

FIELD_LABELS = {
    USERNAME_FIELD: "Full name",
    EMAIL_FIELD: "Email",
    PASSWORD_FIELD: "Password",
    CONFIRM_PASSWORD_FIELD: "Confirm password",
    RESET_EMAIL_FIELD: "Email",
    FORM_ERROR_KEY: "Error",
}

SECRET_FIELDS = (PASSWORD_FIELD, CONFIRM_PASSWORD_FIELD)


class TerminalAuthClient:
    """
    Menu-driven terminal presentation of an ``AuthSystem``.

    Input is read in an executor so the reset timer keeps running on the
    event loop while the user is typing.
    """

    def __init__(self, system: AuthSystem,
                 read_line: Optional[Callable[[str], str]] = None,
                 read_secret: Optional[Callable[[str], str]] = None,
                 write: Callable[[str], None] = print):
        """
        Args:
            system: The auth front end to drive
            read_line: Blocking line reader (default: input)
            read_secret: Blocking reader for passwords (default: getpass)
            write: Output sink (default: print)
        """
        self._system = system
        self._read_line = read_line or input
        self._read_secret = read_secret or getpass.getpass
        self._write = write

    async def _ask(self, prompt: str, secret: bool = False) -> str:
        loop = asyncio.get_running_loop()
        reader = self._read_line
        if secret and not self._system.show_password:
            reader = self._read_secret
        return await loop.run_in_executor(None, reader, prompt)

    def _banner(self, title: str) -> None:
        self._write("=" * 40)
        self._write(f"  {title}")
        self._write("=" * 40)

    def _show_errors(self) -> None:
        for name, message in self._system.errors.items():
            self._write(f"  ! {FIELD_LABELS.get(name, name)}: {message}")

    async def _choose(self, screen: Screen) -> Optional[str]:
        """Read a menu choice; None if the screen changed while waiting."""
        choice = (await self._ask("Enter your choice: ")).strip()
        if self._system.screen is not screen:
            self._write("The screen changed; please choose again.")
            return None
        return choice

    async def _fill(self, fields: List[str]) -> None:
        for name in fields:
            value = await self._ask(f"{FIELD_LABELS[name]}: ", secret=name in SECRET_FIELDS)
            self._system.change_field(name, value)

    async def run(self) -> None:
        """Loop until the user quits."""
        while True:
            if self._system.is_authenticated:
                keep_going = await self._authenticated_menu()
            else:
                match self._system.screen:
                    case Screen.LOGIN:
                        keep_going = await self._login_menu()
                    case Screen.REGISTER:
                        keep_going = await self._register_menu()
                    case Screen.FORGOT_PASSWORD:
                        keep_going = await self._forgot_password_menu()
            if not keep_going:
                self._system.close()
                self._write("Bye!")
                return

    async def _login_menu(self) -> bool:
        self._banner("Log in - Welcome back")
        self._write("  1. Log in")
        self._write("  2. Create an account")
        self._write("  3. Forgotten password?")
        self._write("  P. Show/hide password")
        self._write("  Q. Quit")
        choice = await self._choose(Screen.LOGIN)
        if choice is None:
            return True

        match choice:
            case "1":
                await self._fill([EMAIL_FIELD, PASSWORD_FIELD])
                if self._system.submit_login():
                    self._write(f"Welcome back, {self._system.current_user.username}!")
                else:
                    self._show_errors()
            case "2":
                self._system.show_register()
            case "3":
                self._system.show_forgot_password()
            case "p" | "P":
                self._toggle_password()
            case "q" | "Q":
                return False
            case _:
                self._write("Invalid option. Please choose 1, 2, 3, P or Q.")
        return True

    async def _register_menu(self) -> bool:
        self._banner("Create an account")
        self._write("  1. Sign up")
        self._write("  2. Back to log in")
        self._write("  P. Show/hide password")
        self._write("  Q. Quit")
        choice = await self._choose(Screen.REGISTER)
        if choice is None:
            return True

        match choice:
            case "1":
                await self._fill([USERNAME_FIELD, EMAIL_FIELD, PASSWORD_FIELD, CONFIRM_PASSWORD_FIELD])
                if self._system.submit_register():
                    self._write(f"Account created. Welcome, {self._system.current_user.username}!")
                else:
                    self._show_errors()
            case "2":
                self._system.show_login()
            case "p" | "P":
                self._toggle_password()
            case "q" | "Q":
                return False
            case _:
                self._write("Invalid option. Please choose 1, 2, P or Q.")
        return True

    async def _forgot_password_menu(self) -> bool:
        self._banner("Reset password")
        if self._system.reset_sent:
            self._write("  Reset link sent. Check your email.")
            self._write(f"  Returning to log in in {self._system.reset_flow.delay:g}s...")
        self._write("  1. Send reset link")
        self._write("  2. Back to log in")
        self._write("  Q. Quit")
        choice = await self._choose(Screen.FORGOT_PASSWORD)
        if choice is None:
            return True

        match choice:
            case "1":
                await self._fill([RESET_EMAIL_FIELD])
                if self._system.submit_reset():
                    self._write("Password reset link sent!")
                else:
                    self._show_errors()
            case "2":
                self._system.show_login()
            case "q" | "Q":
                return False
            case _:
                self._write("Invalid option. Please choose 1, 2 or Q.")
        return True

    async def _authenticated_menu(self) -> bool:
        user = self._system.current_user
        self._banner(f"Logged in as {user.username}")
        self._write(f"  Email: {user.email}")
        self._write("  L. Log out")
        self._write("  Q. Quit")
        choice = (await self._ask("Enter your choice: ")).strip()

        match choice:
            case "l" | "L":
                self._system.logout()
                self._write("Logged out.")
            case "q" | "Q":
                return False
            case _:
                self._write("Invalid option. Please choose L or Q.")
        return True

    def _toggle_password(self) -> None:
        shown = self._system.toggle_password_visibility()
        self._write("Passwords will be shown." if shown else "Passwords will be hidden.")

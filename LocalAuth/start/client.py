"""
Client startup module for LocalAuth.
Provides the interactive front end and small store maintenance commands.
"""

import asyncio
import logging

from LocalAuth.config import config
from LocalAuth.core.auth import AuthSystem, CredentialStore, JsonFileKeyValueStore, UserRecord
from LocalAuth.core.cli import TerminalAuthClient
from LocalAuth.core.utils import StorageError

__all__ = ['client', 'run_client', 'list_users', 'whoami', 'logout']

logger = logging.getLogger(__name__)


def _credentials(store_path: str) -> CredentialStore:
    return CredentialStore(JsonFileKeyValueStore(store_path),
                           users_key=config.USERS_KEY,
                           session_key=config.CURRENT_USER_KEY)


async def run_client(store_path: str, **terminal_options) -> AuthSystem:
    """
    Run the terminal front end on the current event loop.

    The store is read and, on exit, written back with async file I/O.

    Args:
        store_path: JSON file holding accounts and the session
        terminal_options: Passed through to ``TerminalAuthClient``
    """
    store = JsonFileKeyValueStore(store_path, load=False)
    await store.reload()

    def on_login(user: UserRecord) -> None:
        logger.info("onLogin: %s", user.email)

    system = AuthSystem.create(store=store, on_login=on_login,
                               loop=asyncio.get_running_loop())
    try:
        await TerminalAuthClient(system, **terminal_options).run()
    finally:
        system.close()
        try:
            await store.save()
        except StorageError as e:
            logger.error("Could not save %s on exit: %s", store_path, e)
    return system


def client(store_path: str = None):
    """
    Start the interactive front end.

    Args:
        store_path: JSON file holding accounts and the session (default from config)
    """
    store_path = store_path or config.STORE_FILE
    print("Welcome to LocalAuth!")
    print(f"Using store: {store_path}")

    try:
        asyncio.run(run_client(store_path))
    except (KeyboardInterrupt, EOFError):
        print("\nClient stopped by user.")


def list_users(store_path: str = None):
    """Print every registered account, without passwords."""
    users = _credentials(store_path or config.STORE_FILE).load_users()
    if not users:
        print("No registered users.")
        return
    for user in users:
        print(f"{user.id}\t{user.email}\t{user.username}")


def whoami(store_path: str = None):
    """Print the persisted session, if any."""
    user = _credentials(store_path or config.STORE_FILE).load_session()
    if user is None:
        print("Not logged in.")
    else:
        print(f"{user.username} <{user.email}>")


def logout(store_path: str = None):
    """Clear the persisted session."""
    _credentials(store_path or config.STORE_FILE).clear_session()
    print("Logged out.")

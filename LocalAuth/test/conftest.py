"""
Test configuration and fixtures for LocalAuth tests.

Provides:
- In-memory and file-backed stores
- A manually advanced event loop for the reset timer
- Sample user data
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple

import pytest

from LocalAuth.core.auth import AuthSystem, JsonFileKeyValueStore, MemoryKeyValueStore
from LocalAuth.core.logging import configure_logging, create_testing_config


class ManualTimerHandle:
    """Stand-in for asyncio.TimerHandle."""

    def __init__(self, when: float, callback: Callable, args: Tuple[Any, ...]):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualLoop:
    """Event loop stub whose clock only moves when the test says so."""

    def __init__(self):
        self.now = 0.0
        self.handles: List[ManualTimerHandle] = []

    def call_later(self, delay: float, callback: Callable, *args) -> ManualTimerHandle:
        handle = ManualTimerHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> int:
        """Move the clock and run due callbacks; returns how many ran."""
        self.now += seconds
        due = sorted((h for h in self.pending if h.when <= self.now), key=lambda h: h.when)
        for handle in due:
            self.handles.remove(handle)
            handle.callback(*handle.args)
        return len(due)


@dataclass
class LoginRecorder:
    """Collects users passed to the onLogin callback."""
    users: list = field(default_factory=list)

    def __call__(self, user) -> None:
        self.users.append(user)


@pytest.fixture(scope="session", autouse=True)
def testing_logging():
    """Route test logs to the console only."""
    configure_logging(create_testing_config())


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store_path(tmp_path) -> str:
    return str(tmp_path / "store" / "localauth.json")


@pytest.fixture
def file_store(store_path) -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(store_path)


@pytest.fixture
def manual_loop() -> ManualLoop:
    return ManualLoop()


@pytest.fixture
def login_recorder() -> LoginRecorder:
    return LoginRecorder()


@pytest.fixture
def auth_system(memory_store, manual_loop, login_recorder) -> AuthSystem:
    system = AuthSystem.create(store=memory_store, on_login=login_recorder,
                               loop=manual_loop, reset_delay=3.0)
    yield system
    system.close()


def fill(system: AuthSystem, **fields) -> None:
    """Apply field edits using presentation field names."""
    for name, value in fields.items():
        system.change_field(name, value)

"""
Durable key/value backends and the credential store built on top of them.

The credential store keeps two keys: the registered-user collection as one
JSON array, and the current session as one JSON object. Anything unreadable
under either key is treated as absent.
"""
import json
import logging
import os
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import aiofiles
import aiofiles.os

from LocalAuth.config import config
from LocalAuth.core.utils import CorruptPersistedState, StorageError
from .models import UserRecord

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Synchronous string key/value persistence."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""


class MemoryKeyValueStore(KeyValueStore):
    """In-process store, lost on exit."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    Every ``set``/``remove`` is written through immediately; memory is only
    updated once the write succeeded. ``reload`` and ``save`` are the async
    equivalents for callers running an event loop, which construct the store
    with ``load=False`` and ``await reload()`` instead.
    """

    def __init__(self, path: str, load: bool = True):
        self._path = path
        self._lock = threading.Lock()
        self._data: Dict[str, str] = self._read_sync() if load else {}

    @property
    def path(self) -> str:
        return self._path

    @staticmethod
    def _decode(content: str, path: str) -> Dict[str, str]:
        try:
            data = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable store file %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store file %s: top level is not an object", path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _read_sync(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return self._decode(f.read(), self._path)
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Cannot read store file %s: %s", self._path, e)
            return {}

    def _write_sync(self, data: Dict[str, str]) -> None:
        try:
            directory = os.path.dirname(self._path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error("Cannot write store file %s: %s", self._path, e)
            raise StorageError(self._path, str(e)) from e

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = dict(self._data)
            data[key] = value
            self._write_sync(data)
            self._data = data

    def remove(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            data = dict(self._data)
            del data[key]
            self._write_sync(data)
            self._data = data

    async def reload(self) -> None:
        """Re-read the file from disk (async)."""
        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            content = ""
        except OSError as e:
            logger.warning("Cannot read store file %s: %s", self._path, e)
            content = ""
        data = self._decode(content, self._path)
        with self._lock:
            self._data = data

    async def save(self) -> None:
        """Write the current contents to disk (async)."""
        with self._lock:
            content = json.dumps(self._data, ensure_ascii=False, indent=2)
        try:
            directory = os.path.dirname(self._path)
            if directory:
                await aiofiles.os.makedirs(directory, exist_ok=True)
            async with aiofiles.open(self._path, "w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Cannot write store file %s: %s", self._path, e)
            raise StorageError(self._path, str(e)) from e


def serialize_users(users: Iterable[UserRecord]) -> str:
    return json.dumps([user.to_dict() for user in users])


def deserialize_users(blob: Optional[str]) -> List[UserRecord]:
    """
    Decode a persisted user collection, preserving order.

    Missing or unreadable data yields an empty list; individual entries that
    are not user records are dropped.
    """
    if not blob:
        return []
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        logger.warning("Discarding unreadable user collection: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Discarding user collection: expected a list, got %s", type(data).__name__)
        return []

    users = []
    for index, item in enumerate(data):
        try:
            users.append(UserRecord.from_dict(item))
        except CorruptPersistedState as e:
            logger.warning("Skipping user entry %d: %s", index, e)
    return users


def find_by_email(users: Iterable[UserRecord], email: str) -> Optional[UserRecord]:
    """First record whose email equals ``email`` exactly."""
    return next((user for user in users if user.email == email), None)


class CredentialStore:
    """
    Registered accounts and the current-session slot.

    Registration does not reject an email that is already registered; lookups
    resolve to the earliest record with that email.
    """

    def __init__(self, backend: KeyValueStore,
                 users_key: str = None, session_key: str = None):
        self._backend = backend
        self._users_key = users_key or config.USERS_KEY
        self._session_key = session_key or config.CURRENT_USER_KEY
        self._last_id = 0
        self._lock = threading.RLock()

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    def load_users(self) -> List[UserRecord]:
        return deserialize_users(self._backend.get(self._users_key))

    def save_users(self, users: Iterable[UserRecord]) -> None:
        self._backend.set(self._users_key, serialize_users(users))

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return find_by_email(self.load_users(), email)

    def _next_id(self, users: List[UserRecord]) -> int:
        # millisecond clock, forced past anything already issued or stored
        candidate = int(time.time() * 1000)
        highest = max((user.id for user in users), default=0)
        self._last_id = max(candidate, self._last_id + 1, highest + 1)
        return self._last_id

    def register(self, email: str, password: str, username: str) -> UserRecord:
        """
        Append a new account and make it the current session.

        Returns:
            The created record
        """
        with self._lock:
            users = self.load_users()
            user = UserRecord(
                id=self._next_id(users),
                email=email,
                password=password,
                username=username,
                profile_image=None,
            )
            if find_by_email(users, email) is not None:
                logger.warning("Registering duplicate email %s; lookups will return the earlier account", email)
            users.append(user)
            self.save_users(users)
            self.persist_session(user)

        logger.info("Registered user %s (id=%d)", email, user.id)
        return user

    def persist_session(self, user: UserRecord) -> None:
        self._backend.set(self._session_key, json.dumps(user.to_dict()))

    def clear_session(self) -> None:
        self._backend.remove(self._session_key)

    def load_session(self) -> Optional[UserRecord]:
        """The persisted current user, or None if absent or unreadable."""
        blob = self._backend.get(self._session_key)
        if not blob:
            return None
        try:
            return UserRecord.from_dict(json.loads(blob))
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable session: %s", e)
        except CorruptPersistedState as e:
            logger.warning("Ignoring malformed session: %s", e)
        return None

"""
Data models for the auth core.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

from LocalAuth.core.utils import (
    CorruptPersistedState,
    EMAIL_FIELD,
    PASSWORD_FIELD,
    CONFIRM_PASSWORD_FIELD,
    USERNAME_FIELD,
    RESET_EMAIL_FIELD,
)

ErrorMap = Dict[str, str]


class Screen(Enum):
    """The form currently shown to the user."""
    LOGIN = "login"
    REGISTER = "register"
    FORGOT_PASSWORD = "forgotPassword"


class AuthState(Enum):
    """Session controller states."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class UserRecord:
    """A registered account. Passwords are stored as entered."""
    id: int
    email: str
    password: str
    username: str
    profile_image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialise with the persisted field names."""
        return {
            "id": self.id,
            "email": self.email,
            "password": self.password,
            "username": self.username,
            "profileImage": self.profile_image,
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'UserRecord':
        """
        Decode a persisted record.

        Raises:
            CorruptPersistedState: if the value does not have the record shape
        """
        if not isinstance(data, dict):
            raise CorruptPersistedState("User record is not an object", {"type": type(data).__name__})

        user_id = data.get("id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise CorruptPersistedState("User record has no integer id", {"id": user_id})

        for key in ("email", "password", "username"):
            if not isinstance(data.get(key), str):
                raise CorruptPersistedState(f"User record field '{key}' is not a string")

        profile_image = data.get("profileImage")
        if profile_image is not None and not isinstance(profile_image, str):
            raise CorruptPersistedState("User record profileImage is not a string")

        return cls(
            id=user_id,
            email=data["email"],
            password=data["password"],
            username=data["username"],
            profile_image=profile_image,
        )


@dataclass
class FormState:
    """Transient input buffer for all three forms."""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    username: str = ""
    reset_email: str = ""

    _ATTRIBUTES = {
        EMAIL_FIELD: "email",
        PASSWORD_FIELD: "password",
        CONFIRM_PASSWORD_FIELD: "confirm_password",
        USERNAME_FIELD: "username",
        RESET_EMAIL_FIELD: "reset_email",
    }

    @classmethod
    def _attribute(cls, name: str) -> str:
        try:
            return cls._ATTRIBUTES[name]
        except KeyError:
            raise ValueError(f"Unknown form field: {name}") from None

    def get(self, name: str) -> str:
        return getattr(self, self._attribute(name))

    def set(self, name: str, value: str) -> None:
        setattr(self, self._attribute(name), value)

    def clear(self) -> None:
        """Reset every field to an empty string."""
        for attribute in self._ATTRIBUTES.values():
            setattr(self, attribute, "")

    def to_dict(self) -> Dict[str, str]:
        """Field values keyed by their presentation names."""
        values = asdict(self)
        return {name: values[attribute] for name, attribute in self._ATTRIBUTES.items()}

"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum
from uuid import UUID

from pydantic import field_validator

from forum.domain.value.common import RootValueObject, ValueObject

LOGIN_MIN_LENGTH = 3
LOGIN_MAX_LENGTH = 20

# Devise's default email pattern: something@something, no whitespace
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class UserState(IntEnum):
    """Lifecycle state of a user account.

    Stored as an integer column; the numeric values are part of the schema.
    """

    DELETED = -1
    NORMAL = 1
    BLOCKED = 2

    def can_transition_to(self, target: "UserState") -> bool:
        """Whether moving from this state to ``target`` is allowed.

        States only move forward: normal -> blocked -> deleted, or
        normal -> deleted directly.
        """
        return target in _STATE_TRANSITIONS[self]


_STATE_TRANSITIONS: dict[UserState, frozenset[UserState]] = {
    UserState.NORMAL: frozenset({UserState.BLOCKED, UserState.DELETED}),
    UserState.BLOCKED: frozenset({UserState.DELETED}),
    UserState.DELETED: frozenset(),
}


class Role(str, Enum):
    """Roles a user can be checked against."""

    ADMIN = "admin"
    WIKI_EDITOR = "wiki_editor"
    MEMBER = "member"


class AuthProvider(str, Enum):
    """External identity providers users can bind to their account."""

    GITHUB = "github"
    TWITTER = "twitter"
    DOUBAN = "douban"
    GOOGLE = "google"


class LikeableType(str, Enum):
    """Type of entity that can be liked."""

    TOPIC = "topic"
    REPLY = "reply"
    POST = "post"
    PHOTO = "photo"


class NotifiableType(str, Enum):
    """Type of entity a notification points at."""

    TOPIC = "topic"
    REPLY = "reply"
    MENTION = "mention"


class LikeableRef(ValueObject):
    """Polymorphic reference to something a user can like."""

    type: LikeableType
    id: UUID


class Login(RootValueObject[str]):
    """User login.

    Letters, digits and underscores only, 3-20 characters.
    Uniqueness (case-insensitive) is checked against the repository.
    """

    @field_validator("root")
    @classmethod
    def validate_login_format(cls, v: str) -> str:
        """Validate login characters and length."""
        if not re.fullmatch(r"\w+", v, re.ASCII):
            raise ValueError("Login may only contain letters, digits and underscores")
        if len(v) < LOGIN_MIN_LENGTH or len(v) > LOGIN_MAX_LENGTH:
            raise ValueError(
                f"Login must be {LOGIN_MIN_LENGTH}-{LOGIN_MAX_LENGTH} characters"
            )
        return v


class Email(RootValueObject[str]):
    """Email address used for sign-in and notifications."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email has a local part and a domain."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Email is invalid")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v


class GitHubRepository(ValueObject):
    """A public repository listed on a user's profile."""

    name: str
    html_url: str
    description: str | None = None
    language: str | None = None
    watchers: int = 0
    fork: bool = False

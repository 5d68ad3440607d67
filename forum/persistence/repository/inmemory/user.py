"""In-memory user repository for testing."""

from typing import Optional

from forum.domain.error import ValidationError
from forum.domain.model.authorization import Authorization
from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import AuthProvider, UserId, UserState


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Authorizations are kept apart from the stored users, like the
    separate table in PostgreSQL, and attached on read.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._authorizations: dict[UserId, list[Authorization]] = {}

    def _load(self, user: User) -> User:
        return user.model_copy(
            update={"authorizations": list(self._authorizations.get(user.id, []))}
        )

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        user = self._users.get(user_id)
        return self._load(user) if user else None

    async def find_by_login(self, login: str) -> Optional[User]:
        """Find a live user by login, ignoring case."""
        wanted = login.lower()
        for user in self._users.values():
            if user.login.lower() == wanted and user.state != UserState.DELETED:
                return self._load(user)
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a live user by email, ignoring case."""
        wanted = email.lower()
        for user in self._users.values():
            if user.email.lower() == wanted and user.state != UserState.DELETED:
                return self._load(user)
        return None

    async def find_by_authorization(
        self, provider: AuthProvider, uid: str
    ) -> Optional[User]:
        """Find the user bound to an external identity."""
        for user_id, authorizations in self._authorizations.items():
            for authorization in authorizations:
                if authorization.provider == provider and authorization.uid == uid:
                    user = self._users.get(user_id)
                    return self._load(user) if user else None
        return None

    async def find_by_reset_password_token(self, token_digest: str) -> Optional[User]:
        """Find the user holding a reset token digest."""
        for user in self._users.values():
            if user.reset_password_token == token_digest:
                return self._load(user)
        return None

    async def save(self, user: User) -> User:
        """Save or update a user (authorizations are not written).

        Mirrors the unique indexes on lower(login) and lower(email) over
        live accounts.
        """
        if user.state != UserState.DELETED:
            for other in self._users.values():
                if other.id == user.id or other.state == UserState.DELETED:
                    continue
                if other.login.lower() == user.login.lower():
                    raise ValidationError.single("login", "Login has already been taken")
                if other.email.lower() == user.email.lower():
                    raise ValidationError.single("email", "Email has already been taken")
        self._users[user.id] = user.model_copy(update={"authorizations": []})
        return user

    async def add_authorization(
        self, user_id: UserId, authorization: Authorization
    ) -> None:
        """Append an authorization record."""
        self._authorizations.setdefault(user_id, []).append(authorization)

    async def find_hot(self, limit: int) -> list[User]:
        """Most active users by replies, then topics."""
        ranked = sorted(
            self._users.values(),
            key=lambda u: (u.replies_count, u.topics_count),
            reverse=True,
        )
        return [self._load(user) for user in ranked[:limit]]

    async def find_all_locations(self) -> list[tuple[str, Optional[str]]]:
        """Snapshot of (login, location) for all users."""
        return [(user.login, user.location) for user in self._users.values()]

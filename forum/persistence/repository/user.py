"""PostgreSQL implementation of User repository."""

from collections import defaultdict
from typing import Any, Optional, Sequence

import logfire
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ValidationError
from forum.domain.model import Authorization, User
from forum.domain.repository import UserRepository
from forum.domain.value import AuthProvider, UserId, UserState
from forum.persistence.mappers import (
    authorization_to_dict,
    row_to_authorization,
    row_to_user,
    user_to_dict,
)
from forum.persistence.tables import authorizations_table, users_table

# Unique index -> form field reported as taken
_UNIQUE_FIELDS = {
    "uq_users_login_lower": "login",
    "uq_users_email_lower": "email",
}


def _taken_field(error: IntegrityError) -> str | None:
    message = str(error.orig)
    for index_name, field in _UNIQUE_FIELDS.items():
        if index_name in message:
            return field
    return None


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._first(stmt)

    async def find_by_login(self, login: str) -> Optional[User]:
        """Find a user by login, ignoring case.

        Compares lowercased values with ``=`` so the input is never
        treated as a pattern. Soft-deleted rows are skipped.
        """
        stmt = (
            select(users_table)
            .where(func.lower(users_table.c.login) == login.lower())
            .where(users_table.c.state != int(UserState.DELETED))
            .order_by(users_table.c.created_at)
            .limit(1)
        )
        return await self._first(stmt)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        stmt = (
            select(users_table)
            .where(func.lower(users_table.c.email) == email.lower())
            .where(users_table.c.state != int(UserState.DELETED))
            .order_by(users_table.c.created_at)
            .limit(1)
        )
        return await self._first(stmt)

    async def find_by_authorization(
        self, provider: AuthProvider, uid: str
    ) -> Optional[User]:
        """Find the user bound to an external identity.

        Joins users and authorizations.
        """
        stmt = (
            select(users_table)
            .select_from(
                users_table.join(
                    authorizations_table,
                    users_table.c.id == authorizations_table.c.user_id,
                )
            )
            .where(authorizations_table.c.provider == provider.value)
            .where(authorizations_table.c.uid == uid)
            .limit(1)
        )
        return await self._first(stmt)

    async def find_by_reset_password_token(self, token_digest: str) -> Optional[User]:
        """Find the user holding a reset token digest."""
        stmt = select(users_table).where(
            users_table.c.reset_password_token == token_digest
        )
        return await self._first(stmt)

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Authorizations are written by ``add_authorization`` only.

        Raises:
            ValidationError: If another live account holds the login or email
        """
        exists = await self.session.scalar(
            select(users_table.c.id).where(users_table.c.id == user.id)
        )

        user_dict = user_to_dict(user)

        if exists:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        # Savepoint keeps the session usable after a unique violation
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            field = _taken_field(e)
            if field is None:
                raise
            logfire.warn("Unique violation on save", user_id=str(user.id), field=field)
            raise ValidationError.single(
                field, f"{field.capitalize()} has already been taken"
            ) from e

        await self.session.flush()
        return user

    async def add_authorization(
        self, user_id: UserId, authorization: Authorization
    ) -> None:
        """Insert an authorization row (duplicates allowed)."""
        stmt = authorizations_table.insert().values(
            **authorization_to_dict(user_id, authorization)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_hot(self, limit: int) -> list[User]:
        """Most active users by replies, then topics."""
        stmt = (
            select(users_table)
            .order_by(
                users_table.c.replies_count.desc(), users_table.c.topics_count.desc()
            )
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]
        return await self._to_users(rows)

    async def find_all_locations(self) -> list[tuple[str, Optional[str]]]:
        """Snapshot of (login, location) for all users.

        Optimized query that fetches only the two columns the
        aggregation needs.
        """
        stmt = select(users_table.c.login, users_table.c.location)
        result = await self.session.execute(stmt)
        return [(row.login, row.location) for row in result.all()]

    async def _first(self, stmt: Any) -> Optional[User]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        users = await self._to_users([dict(row)])
        return users[0]

    async def _to_users(self, rows: Sequence[dict[str, Any]]) -> list[User]:
        """Map rows to users, loading their authorizations in one query."""
        if not rows:
            return []

        stmt = (
            select(authorizations_table)
            .where(authorizations_table.c.user_id.in_([row["id"] for row in rows]))
            .order_by(authorizations_table.c.id)
        )
        result = await self.session.execute(stmt)
        by_user: dict[Any, list[Authorization]] = defaultdict(list)
        for auth_row in result.mappings().all():
            by_user[auth_row["user_id"]].append(row_to_authorization(dict(auth_row)))

        return [row_to_user(row, by_user.get(row["id"], [])) for row in rows]

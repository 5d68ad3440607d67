"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.authorization import Authorization
from forum.domain.model.user import User
from forum.domain.value import AuthProvider, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user (with authorizations loaded) if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_login(self, login: str) -> Optional[User]:
        """Find a live user whose login equals ``login`` ignoring case.

        The argument is compared literally; it is never interpreted as a
        pattern. Soft-deleted accounts are skipped; they all share one
        placeholder login.

        Args:
            login: Login to look up

        Returns:
            The first matching user, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a live user whose email equals ``email`` ignoring case.

        Soft-deleted accounts are skipped.

        Args:
            email: Email address to look up

        Returns:
            The first matching user, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_authorization(
        self, provider: AuthProvider, uid: str
    ) -> Optional[User]:
        """Find the user bound to an external identity.

        Args:
            provider: The identity provider
            uid: The user's ID on that provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_reset_password_token(self, token_digest: str) -> Optional[User]:
        """Find the user holding a password reset token.

        Args:
            token_digest: Stored digest of the reset token

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Authorizations are not written here; use ``add_authorization``.

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            ValidationError: If another live (not soft-deleted) account
                already holds the login or email, ignoring case
        """
        pass

    @abstractmethod
    async def add_authorization(
        self, user_id: UserId, authorization: Authorization
    ) -> None:
        """Append an authorization record to a user.

        No deduplication: adding the same (provider, uid) twice stores
        two records.

        Args:
            user_id: Owner of the authorization
            authorization: Authorization to append
        """
        pass

    @abstractmethod
    async def find_hot(self, limit: int) -> list[User]:
        """Find the most active users.

        Ordered by replies_count, then topics_count, both descending.

        Args:
            limit: Maximum number of users to return
        """
        pass

    @abstractmethod
    async def find_all_locations(self) -> list[tuple[str, Optional[str]]]:
        """Snapshot of (login, location) for every user.

        Minimal projection used by the location aggregation.
        """
        pass

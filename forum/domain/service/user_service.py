"""User domain service."""

from datetime import datetime
from typing import Callable, Sequence

import logfire

from forum.domain.error import BusinessRuleViolationError, NotFoundError
from forum.domain.model import Notification, User
from forum.domain.repository import NotificationRepository, UserRepository
from forum.domain.value import UserId, UserState

from .base import Service

# Login every soft-deleted account ends up with
DELETED_LOGIN = "Guest"


class UserService(Service):
    """Domain service for user lifecycle and engagement operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        mail_domain: str,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            notification_repository: Notification repository
            mail_domain: Domain for placeholder emails of deleted accounts
            clock: Source of the current time
        """
        self.user_repository = user_repository
        self.notification_repository = notification_repository
        self.mail_domain = mail_domain
        self.clock = clock

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_login(self, login: str) -> User | None:
        """Get user by login, ignoring case."""
        with logfire.span("user_service.get_by_login", login=login):
            user = await self.user_repository.find_by_login(login)
            if not user:
                logfire.warn("User not found", login=login)
            return user

    async def soft_delete(self, user_id: UserId) -> User:
        """Scrub personal data and mark the account deleted.

        The record is kept. Email becomes ``{login}_{id}@{mail_domain}``,
        login becomes ``Guest`` and the profile fields are blanked. The
        result is saved without validation, since many deleted accounts
        share the same login. Deleting an already deleted account is a
        no-op.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.soft_delete", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            if user.state == UserState.DELETED:
                logfire.info("User already deleted", user_id=str(user_id))
                return user

            deleted = user.model_copy(
                update={
                    "email": f"{user.login}_{user.id}@{self.mail_domain}",
                    "login": DELETED_LOGIN,
                    "bio": "",
                    "website": "",
                    "github": "",
                    "tagline": "",
                    "location": "",
                    "state": UserState.DELETED,
                    "updated_at": self.clock(),
                }
            )
            saved = await self.user_repository.save(deleted)
            logfire.info("User soft-deleted", user_id=str(user_id))
            return saved

    async def block(self, user_id: UserId) -> User:
        """Block a normal account.

        Raises:
            NotFoundError: If user not found
            BusinessRuleViolationError: If the account is not in normal state
        """
        with logfire.span("user_service.block", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            self._check_transition(user, UserState.BLOCKED)
            saved = await self.user_repository.save(
                user.model_copy(
                    update={"state": UserState.BLOCKED, "updated_at": self.clock()}
                )
            )
            logfire.info("User blocked", user_id=str(user_id))
            return saved

    async def hot_users(self, limit: int = 20) -> list[User]:
        """Most active users by replies, then topics."""
        with logfire.span("user_service.hot_users", limit=limit):
            return await self.user_repository.find_hot(limit)

    async def read_notifications(
        self, user_id: UserId, notifications: Sequence[Notification]
    ) -> int:
        """Mark the unread ones among ``notifications`` as read.

        Only notifications belonging to ``user_id`` are touched, in a
        single bulk update.

        Returns:
            Number of notifications marked read
        """
        unread_ids = [n.id for n in notifications if not n.read]
        if not unread_ids:
            return 0

        with logfire.span(
            "user_service.read_notifications",
            user_id=str(user_id),
            unread=len(unread_ids),
        ):
            updated = await self.notification_repository.mark_read(user_id, unread_ids)
            logfire.info(
                "Notifications marked read", user_id=str(user_id), count=updated
            )
            return updated

    @staticmethod
    def _check_transition(user: User, target: UserState) -> None:
        if not user.state.can_transition_to(target):
            logfire.warn(
                "Illegal state transition",
                user_id=str(user.id),
                current=user.state.name,
                target=target.name,
            )
            raise BusinessRuleViolationError(
                f"Cannot move user {user.id} from {user.state.name} to {target.name}"
            )

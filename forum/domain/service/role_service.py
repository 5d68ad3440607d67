"""Role checks."""

from typing import Iterable

from forum.domain.model import User
from forum.domain.value import Role

from .base import Service


class RoleService(Service):
    """Answers "may this user do X" questions.

    The admin list comes from configuration and is matched exactly
    against the user's email.
    """

    def __init__(self, admin_emails: Iterable[str]) -> None:
        self.admin_emails = frozenset(admin_emails)

    def is_admin(self, user: User) -> bool:
        return user.email in self.admin_emails

    def is_wiki_editor(self, user: User) -> bool:
        """Admins and verified users may edit the wiki."""
        return self.is_admin(user) or user.verified is True

    def has_role(self, user: User, role: Role | str) -> bool:
        """Check ``user`` against a role; unknown roles are never granted."""
        try:
            role = Role(role)
        except ValueError:
            return False

        if role is Role.ADMIN:
            return self.is_admin(user)
        if role is Role.WIKI_EDITOR:
            return self.is_wiki_editor(user)
        return role is Role.MEMBER

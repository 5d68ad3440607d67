"""External identity binding."""

from datetime import datetime

from forum.domain.model import Authorization, User
from forum.domain.value import AuthProvider

from .capability import AuthCapability


class Omniauthable:
    capability = AuthCapability.OMNIAUTHABLE

    def bind(
        self, user: User, provider: AuthProvider, uid: str, now: datetime
    ) -> tuple[User, Authorization]:
        """Append an authorization for (provider, uid) to ``user``.

        Existing records are not checked, so binding the same identity
        twice leaves two records.

        Returns:
            Tuple of (updated user, new authorization)
        """
        authorization = Authorization(provider=provider, uid=uid, created_at=now)
        updated = user.model_copy(
            update={"authorizations": [*user.authorizations, authorization]}
        )
        return updated, authorization

    def is_bound(self, user: User, provider: AuthProvider) -> bool:
        return any(a.provider == provider for a in user.authorizations)

"""OAuth sign in use case."""

import logfire
from pydantic import BaseModel

from forum.domain.service import IdentityService
from forum.domain.value import AuthProvider, UserId


class OAuthSignInRequest(BaseModel):
    """Identity returned by an OAuth callback.

    ``login`` and ``email`` are only used when no account is bound yet.
    """

    provider: AuthProvider
    uid: str
    login: str
    email: str
    name: str | None = None


class OAuthSignInResponse(BaseModel):
    """OAuth sign in response."""

    user_id: UserId
    login: str
    is_new_user: bool


class OAuthSignInUseCase:
    """Use case for signing in (or up) through an external identity."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize OAuth sign in use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: OAuthSignInRequest) -> OAuthSignInResponse:
        """Execute OAuth sign-in flow.

        Steps:
        1. Look up the account bound to (provider, uid)
        2. If none exists, create a passwordless account bound to it

        Raises:
            ValidationError: If a new account fails validation
        """
        user = await self.identity_service.find_for_oauth(request.provider, request.uid)
        if user:
            logfire.info(
                "Existing user signed in via OAuth",
                user_id=str(user.id),
                provider=request.provider.value,
            )
            return OAuthSignInResponse(user_id=user.id, login=user.login, is_new_user=False)

        user = await self.identity_service.register_from_oauth(
            provider=request.provider,
            uid=request.uid,
            login=request.login,
            email=request.email,
            name=request.name,
        )
        return OAuthSignInResponse(user_id=user.id, login=user.login, is_new_user=True)

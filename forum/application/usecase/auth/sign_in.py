"""Sign in use case."""

from pydantic import BaseModel

from forum.domain.service import IdentityService
from forum.domain.value import UserId


class SignInRequest(BaseModel):
    """Password sign-in form."""

    login: str  # login or email
    password: str
    remember_me: bool = False
    ip: str | None = None


class SignInResponse(BaseModel):
    """Sign in response."""

    user_id: UserId
    login: str
    sign_in_count: int
    remembered: bool


class SignInUseCase:
    """Use case for signing in with login (or email) and password."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize sign in use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: SignInRequest) -> SignInResponse:
        """Authenticate and record the sign-in.

        Raises:
            AuthenticationError: On bad credentials or an inactive account
        """
        user = await self.identity_service.authenticate(
            request.login,
            request.password,
            ip=request.ip,
            remember=request.remember_me,
        )
        return SignInResponse(
            user_id=user.id,
            login=user.login,
            sign_in_count=user.sign_in_count,
            remembered=user.remember_created_at is not None,
        )

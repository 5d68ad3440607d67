"""Register user use case."""

from pydantic import BaseModel

from forum.domain.service import IdentityService
from forum.domain.value import UserId


class RegisterUserRequest(BaseModel):
    """Sign-up form."""

    login: str
    email: str
    password: str | None = None
    password_confirmation: str | None = None
    name: str | None = None
    location: str | None = None


class RegisterUserResponse(BaseModel):
    """Register user response."""

    user_id: UserId
    login: str
    email: str


class RegisterUserUseCase:
    """Use case for creating an account from the sign-up form."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize register user use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Validate and create the account; the welcome mail is queued.

        Raises:
            ValidationError: With every failing field
        """
        user = await self.identity_service.register(
            login=request.login,
            email=request.email,
            password=request.password,
            password_confirmation=request.password_confirmation,
            name=request.name,
            location=request.location,
        )
        return RegisterUserResponse(user_id=user.id, login=user.login, email=user.email)

"""Update account use case."""

from typing import Any

from pydantic import BaseModel

from forum.domain.service import IdentityService
from forum.domain.value import UserId


class UpdateAccountRequest(BaseModel):
    """Account settings form.

    Only submitted fields are applied; the credential fields are optional
    and trigger a password change when any of them is non-empty.
    """

    user_id: UserId
    login: str | None = None
    email: str | None = None
    name: str | None = None
    location: str | None = None
    bio: str | None = None
    website: str | None = None
    github: str | None = None
    tagline: str | None = None
    current_password: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class UpdateAccountResponse(BaseModel):
    """Update account response."""

    user_id: UserId
    login: str
    email: str
    password_changed: bool


class UpdateAccountUseCase:
    """Use case for the account settings page."""

    def __init__(self, identity_service: IdentityService) -> None:
        """Initialize update account use case.

        Args:
            identity_service: Identity domain service
        """
        self.identity_service = identity_service

    async def execute(self, request: UpdateAccountRequest) -> UpdateAccountResponse:
        """Apply the submitted fields.

        Raises:
            NotFoundError: If user not found
            ValidationError: With every failing field
        """
        params: dict[str, Any] = request.model_dump(
            exclude={"user_id"}, exclude_unset=True
        )
        password_changed = bool(params.get("password"))
        user = await self.identity_service.update_with_password(
            request.user_id, params
        )
        return UpdateAccountResponse(
            user_id=user.id,
            login=user.login,
            email=user.email,
            password_changed=password_changed,
        )

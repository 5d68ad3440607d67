"""Delete account use case."""

from pydantic import BaseModel

from forum.domain.service import UserService
from forum.domain.value import UserId, UserState


class DeleteAccountRequest(BaseModel):
    """Delete account request."""

    user_id: UserId


class DeleteAccountResponse(BaseModel):
    """Delete account response."""

    user_id: UserId
    login: str
    state: UserState


class DeleteAccountUseCase:
    """Use case for a user deleting their own account (soft delete)."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize delete account use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: DeleteAccountRequest) -> DeleteAccountResponse:
        """Scrub the account; the record itself is kept.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.soft_delete(request.user_id)
        return DeleteAccountResponse(user_id=user.id, login=user.login, state=user.state)

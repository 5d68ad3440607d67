"""Field validation for new and updated accounts."""

from pydantic import ValidationError as PydanticValidationError

from forum.domain.error import ValidationError
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import Email, Login


def _first_message(exc: PydanticValidationError) -> str:
    """Extract our own message from a pydantic validation error."""
    error = exc.errors()[0]
    ctx_error = error.get("ctx", {}).get("error")
    return str(ctx_error) if ctx_error is not None else error["msg"]


class Validatable:
    """Checks login, email and password rules.

    Collects every failing field before raising, so callers get the
    complete list in one ``ValidationError``.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_min_length: int = 6,
        password_max_length: int = 128,
    ) -> None:
        self.user_repository = user_repository
        self.password_min_length = password_min_length
        self.password_max_length = password_max_length

    async def validate(
        self,
        user: User,
        password: str | None = None,
        password_confirmation: str | None = None,
        password_required: bool = False,
    ) -> None:
        """Validate ``user`` plus an optional new password.

        Args:
            user: User as it would be saved
            password: Plain new password, if one is being set
            password_confirmation: Confirmation typed by the user
            password_required: Whether an empty password is an error

        Raises:
            ValidationError: With every failing field
        """
        errors: dict[str, list[str]] = {}

        if not user.guest:
            errors.update(await self._validate_login(user))
        errors.update(await self._validate_email(user))
        errors.update(
            self._validate_password(password, password_confirmation, password_required)
        )

        if errors:
            raise ValidationError(errors)

    async def _validate_login(self, user: User) -> dict[str, list[str]]:
        if not user.login:
            return {"login": ["Login can't be blank"]}
        try:
            Login(user.login)
        except PydanticValidationError as e:
            return {"login": [_first_message(e)]}

        existing = await self.user_repository.find_by_login(user.login)
        if existing and existing.id != user.id:
            return {"login": ["Login has already been taken"]}
        return {}

    async def _validate_email(self, user: User) -> dict[str, list[str]]:
        if not user.email:
            return {"email": ["Email can't be blank"]}
        try:
            Email(user.email)
        except PydanticValidationError as e:
            return {"email": [_first_message(e)]}

        existing = await self.user_repository.find_by_email(user.email)
        if existing and existing.id != user.id:
            return {"email": ["Email has already been taken"]}
        return {}

    def _validate_password(
        self,
        password: str | None,
        password_confirmation: str | None,
        password_required: bool,
    ) -> dict[str, list[str]]:
        if not password:
            if password_required:
                return {"password": ["Password can't be blank"]}
            return {}

        messages = []
        if not self.password_min_length <= len(password) <= self.password_max_length:
            messages.append(
                f"Password must be {self.password_min_length}-"
                f"{self.password_max_length} characters"
            )
        errors: dict[str, list[str]] = {}
        if messages:
            errors["password"] = messages
        if password_confirmation is not None and password_confirmation != password:
            errors["password_confirmation"] = ["Password confirmation doesn't match"]
        return errors

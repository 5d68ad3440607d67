"""User use cases."""

from .delete_account import DeleteAccountUseCase
from .get_user_profile import GetUserProfileUseCase
from .register_user import RegisterUserUseCase
from .update_account import UpdateAccountUseCase

__all__ = [
    "DeleteAccountUseCase",
    "GetUserProfileUseCase",
    "RegisterUserUseCase",
    "UpdateAccountUseCase",
]

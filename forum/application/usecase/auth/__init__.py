"""Auth use cases."""

from .oauth_sign_in import OAuthSignInUseCase
from .sign_in import SignInUseCase

__all__ = ["OAuthSignInUseCase", "SignInUseCase"]

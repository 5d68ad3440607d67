"""Unit tests for the sign-in use cases."""

import pytest

from forum.application.usecase.auth import OAuthSignInUseCase, SignInUseCase
from forum.application.usecase.auth.oauth_sign_in import OAuthSignInRequest
from forum.application.usecase.auth.sign_in import SignInRequest
from forum.domain.error import AuthenticationError
from forum.domain.repository import UserRepository
from forum.domain.value import AuthProvider
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSignIn:
    """Tests for SignInUseCase."""

    @pytest.mark.asyncio
    async def test_sign_in_with_email_and_remember(self, unit_env):
        use_case = await unit_env.get(SignInUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        response = await use_case.execute(
            SignInRequest(login="Alice@Example.com", password="secret1", remember_me=True)
        )

        assert response.user_id == user.id
        assert response.remembered is True

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        use_case = await unit_env.get(SignInUseCase)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("alice", password="secret1"))

        with pytest.raises(AuthenticationError):
            await use_case.execute(SignInRequest(login="alice", password="nope"))


class TestOAuthSignIn:
    """Tests for OAuthSignInUseCase."""

    @pytest.mark.asyncio
    async def test_first_sign_in_creates_account(self, unit_env):
        """Should create a bound account, then reuse it on the next sign-in."""
        # Arrange
        use_case = await unit_env.get(OAuthSignInUseCase)
        request = OAuthSignInRequest(
            provider=AuthProvider.GITHUB,
            uid="42",
            login="octocat",
            email="octocat@example.com",
        )

        # Act
        first = await use_case.execute(request)
        second = await use_case.execute(request)

        # Assert
        assert first.is_new_user is True
        assert second.is_new_user is False
        assert second.user_id == first.user_id

    @pytest.mark.asyncio
    async def test_new_account_is_passwordless(self, unit_env):
        use_case = await unit_env.get(OAuthSignInUseCase)
        user_repo = await unit_env.get(UserRepository)

        response = await use_case.execute(
            OAuthSignInRequest(
                provider=AuthProvider.TWITTER,
                uid="abc",
                login="tweeter",
                email="tweeter@example.com",
            )
        )

        user = await user_repo.find_by_id(response.user_id)
        assert user.password_hash is None
        assert [(a.provider, a.uid) for a in user.authorizations] == [
            (AuthProvider.TWITTER, "abc")
        ]

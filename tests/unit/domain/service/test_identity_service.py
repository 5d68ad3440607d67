"""Unit tests for IdentityService."""

import pytest

from forum.adapter.mail import MockMailer
from forum.domain.error import AuthenticationError, NotFoundError, ValidationError
from forum.domain.repository import UserRepository
from forum.domain.service import IdentityService, Mailer
from forum.domain.service.auth import AuthCapability
from forum.domain.value import AuthProvider, UserState
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRegister:
    """Tests for IdentityService.register()."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "login", ["abc", "alice", "Alice_2", "a_b_c", "x" * 20, "user_123"]
    )
    async def test_valid_logins_register(self, unit_env, login):
        """Should accept word-character logins of 3-20 characters."""
        service = await unit_env.get(IdentityService)

        user = await service.register(login, f"{login}@example.com", "secret1", "secret1")

        assert user.login == login
        assert user.state == UserState.NORMAL
        assert user.password_hash and user.password_hash != "secret1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "login", ["ab", "x" * 21, "has space", "dash-ed", "dot.ted", "émile", ""]
    )
    async def test_invalid_logins_rejected(self, unit_env, login):
        """Should reject logins with bad characters or length on the login field."""
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError) as exc_info:
            await service.register(login, "someone@example.com", "secret1", "secret1")

        assert "login" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_login_taken_case_insensitively(self, unit_env):
        """Should reject a login that differs from an existing one only by case."""
        service = await unit_env.get(IdentityService)
        await service.register("alice", "alice@example.com", "secret1", "secret1")

        with pytest.raises(ValidationError) as exc_info:
            await service.register("ALICE", "other@example.com", "secret1", "secret1")

        assert exc_info.value.errors["login"] == ["Login has already been taken"]

    @pytest.mark.asyncio
    async def test_email_taken_case_insensitively(self, unit_env):
        """Should reject an email already used with different casing."""
        service = await unit_env.get(IdentityService)
        await service.register("alice", "alice@example.com", "secret1", "secret1")

        with pytest.raises(ValidationError) as exc_info:
            await service.register("bob", "Alice@Example.com", "secret1", "secret1")

        assert exc_info.value.errors["email"] == ["Email has already been taken"]

    @pytest.mark.asyncio
    async def test_collects_every_failing_field(self, unit_env):
        """Should report login, email and password problems together."""
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError) as exc_info:
            await service.register("a", "not-an-email", "123", "456")

        assert set(exc_info.value.errors) == {
            "login",
            "email",
            "password",
            "password_confirmation",
        }

    @pytest.mark.asyncio
    async def test_password_required_for_plain_signup(self, unit_env):
        """Should require a password when no provider is bound."""
        service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError) as exc_info:
            await service.register("alice", "alice@example.com", None)

        assert exc_info.value.errors["password"] == ["Password can't be blank"]

    @pytest.mark.asyncio
    async def test_welcome_mail_sent_once(self, unit_env):
        """Should send exactly one welcome mail to the new user."""
        service = await unit_env.get(IdentityService)
        mailer = await unit_env.get(Mailer)
        assert isinstance(mailer, MockMailer)

        await service.register("alice", "alice@example.com", "secret1", "secret1")

        assert [(m.kind, m.email) for m in mailer.sent] == [
            ("welcome", "alice@example.com")
        ]

    @pytest.mark.asyncio
    async def test_no_mail_when_validation_fails(self, unit_env):
        """Should not send a welcome mail for a rejected sign-up."""
        service = await unit_env.get(IdentityService)
        mailer = await unit_env.get(Mailer)

        with pytest.raises(ValidationError):
            await service.register("a", "alice@example.com", "secret1", "secret1")

        assert mailer.sent == []


class TestOAuth:
    """Tests for OAuth registration and binding."""

    @pytest.mark.asyncio
    async def test_register_from_oauth_without_password(self, unit_env):
        """Should create a passwordless account bound to the provider."""
        service = await unit_env.get(IdentityService)

        user = await service.register_from_oauth(
            AuthProvider.GITHUB, "12345", "octocat", "octocat@example.com"
        )

        assert user.password_hash is None
        assert service.is_bound(user, AuthProvider.GITHUB)
        assert not service.is_bound(user, AuthProvider.TWITTER)

        found = await service.find_for_oauth(AuthProvider.GITHUB, "12345")
        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_find_for_oauth_unknown_identity(self, unit_env):
        """Should return None for an identity nobody has bound."""
        service = await unit_env.get(IdentityService)

        assert await service.find_for_oauth(AuthProvider.GOOGLE, "nobody") is None

    @pytest.mark.asyncio
    async def test_bind_twice_keeps_both_records(self, unit_env):
        """Should not deduplicate repeated binds of the same identity."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        await service.bind(user.id, AuthProvider.GITHUB, "42")
        await service.bind(user.id, AuthProvider.GITHUB, "42")

        stored = await user_repo.find_by_id(user.id)
        assert stored is not None
        assert [(a.provider, a.uid) for a in stored.authorizations] == [
            (AuthProvider.GITHUB, "42"),
            (AuthProvider.GITHUB, "42"),
        ]

    @pytest.mark.asyncio
    async def test_bind_unknown_user(self, unit_env):
        """Should raise NotFoundError for a missing user."""
        service = await unit_env.get(IdentityService)

        with pytest.raises(NotFoundError):
            await service.bind(make_user().id, AuthProvider.GITHUB, "42")


class TestAuthentication:
    """Tests for lookup and password sign-in."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("stored", ["alice", "ALICE", "Alice"])
    async def test_find_for_authentication_ignores_case(self, unit_env, stored):
        """Should find the account whatever the casing of login."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user(stored))

        found = await service.find_for_authentication("Alice")

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_find_for_authentication_by_email(self, unit_env):
        """Should fall back to the email when no login matches."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", email="alice@example.com"))

        found = await service.find_for_authentication("ALICE@example.com")

        assert found is not None
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_login_is_not_a_pattern(self, unit_env):
        """Should compare the input literally, never as a pattern."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("alice"))

        assert await service.find_for_authentication("al.*") is None
        assert await service.find_for_authentication("%") is None

    @pytest.mark.asyncio
    async def test_authenticate_tracks_sign_in(self, unit_env):
        """Should count the sign-in and rotate the tracked IPs."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        first = await service.authenticate("alice", "secret1", ip="10.0.0.1")
        second = await service.authenticate("alice", "secret1", ip="10.0.0.2")

        assert first.id == user.id
        assert first.sign_in_count == 1
        assert first.last_sign_in_ip == "10.0.0.1"
        assert second.sign_in_count == 2
        assert second.current_sign_in_ip == "10.0.0.2"
        assert second.last_sign_in_ip == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, unit_env):
        """Should reject a wrong password."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("alice", password="secret1"))

        with pytest.raises(AuthenticationError):
            await service.authenticate("alice", "wrong-password")

    @pytest.mark.asyncio
    async def test_authenticate_unknown_user(self, unit_env):
        """Should reject an unknown login the same way as a bad password."""
        service = await unit_env.get(IdentityService)

        with pytest.raises(AuthenticationError, match="Invalid login or password"):
            await service.authenticate("nobody", "secret1")

    @pytest.mark.asyncio
    async def test_authenticate_blocked_user(self, unit_env):
        """Should refuse sign-in for a blocked account."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(
            make_user("alice", password="secret1", state=UserState.BLOCKED)
        )

        with pytest.raises(AuthenticationError, match="not active"):
            await service.authenticate("alice", "secret1")

    @pytest.mark.asyncio
    async def test_remember_and_forget(self, unit_env):
        """Should start a remembered session and end it on forget_me."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        signed_in = await service.authenticate("alice", "secret1", remember=True)
        assert signed_in.remember_created_at is not None
        assert not service.is_remember_expired(signed_in)

        forgotten = await service.forget_me(user.id)
        assert forgotten.remember_created_at is None
        assert service.is_remember_expired(forgotten)


class TestPasswordRequired:
    """Tests for IdentityService.password_required()."""

    @pytest.mark.asyncio
    async def test_guest_never_needs_password(self, unit_env):
        service = await unit_env.get(IdentityService)

        assert service.password_required(make_user(guest=True)) is False

    @pytest.mark.asyncio
    async def test_plain_account_needs_password(self, unit_env):
        service = await unit_env.get(IdentityService)

        assert service.password_required(make_user()) is True

    @pytest.mark.asyncio
    async def test_bound_account_needs_password_only_when_setting_one(self, unit_env):
        service = await unit_env.get(IdentityService)
        user = await service.register_from_oauth(
            AuthProvider.GITHUB, "1", "octocat", "octocat@example.com"
        )

        assert service.password_required(user) is False
        assert service.password_required(user, "new-secret") is True


class TestUpdateWithPassword:
    """Tests for IdentityService.update_with_password()."""

    @pytest.mark.asyncio
    async def test_profile_only_update_skips_password_check(self, unit_env):
        """Should apply profile fields without asking for the current password."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        updated = await service.update_with_password(
            user.id,
            {"location": "Shanghai", "current_password": "", "password": ""},
        )

        assert updated.location == "Shanghai"
        assert updated.password_hash == user.password_hash

    @pytest.mark.asyncio
    async def test_password_change_requires_current_password(self, unit_env):
        """Should reject a password change without the current password."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        with pytest.raises(ValidationError) as exc_info:
            await service.update_with_password(
                user.id, {"password": "newsecret", "password_confirmation": "newsecret"}
            )

        assert exc_info.value.errors["current_password"] == [
            "Current password can't be blank"
        ]

    @pytest.mark.asyncio
    async def test_password_change_with_wrong_current_password(self, unit_env):
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        with pytest.raises(ValidationError) as exc_info:
            await service.update_with_password(
                user.id,
                {
                    "current_password": "nope",
                    "password": "newsecret",
                    "password_confirmation": "newsecret",
                },
            )

        assert exc_info.value.errors["current_password"] == [
            "Current password is invalid"
        ]

    @pytest.mark.asyncio
    async def test_password_change_succeeds(self, unit_env):
        """Should store a new hash that authenticates with the new password."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        await service.update_with_password(
            user.id,
            {
                "current_password": "secret1",
                "password": "newsecret",
                "password_confirmation": "newsecret",
            },
        )

        signed_in = await service.authenticate("alice", "newsecret")
        assert signed_in.id == user.id
        with pytest.raises(AuthenticationError):
            await service.authenticate("alice", "secret1")

    @pytest.mark.asyncio
    async def test_protected_fields_are_ignored(self, unit_env):
        """Should not let a profile update change state or counters."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.save(make_user("alice", password="secret1"))

        updated = await service.update_with_password(
            user.id, {"bio": "Rubyist", "state": -1, "replies_count": 999}
        )

        assert updated.bio == "Rubyist"
        assert updated.state == UserState.NORMAL
        assert updated.replies_count == 0


class TestPasswordReset:
    """Tests for the reset password flow."""

    @pytest.mark.asyncio
    async def test_reset_flow(self, unit_env):
        """Should mail a token that sets a new password exactly once."""
        service = await unit_env.get(IdentityService)
        user_repo = await unit_env.get(UserRepository)
        mailer = await unit_env.get(Mailer)
        await user_repo.save(make_user("alice", password="secret1"))

        await service.send_reset_password_instructions("alice@example.com")
        token = mailer.sent[-1].token
        assert token

        stored = await user_repo.find_by_login("alice")
        assert stored.reset_password_token != token

        await service.reset_password(token, "newsecret", "newsecret")
        assert (await service.authenticate("alice", "newsecret")).login == "alice"

        with pytest.raises(ValidationError) as exc_info:
            await service.reset_password(token, "another1", "another1")
        assert "reset_password_token" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_unknown_email_is_ignored(self, unit_env):
        """Should not reveal whether an email is registered."""
        service = await unit_env.get(IdentityService)
        mailer = await unit_env.get(Mailer)

        await service.send_reset_password_instructions("nobody@example.com")

        assert mailer.sent == []


class TestCapabilities:
    @pytest.mark.asyncio
    async def test_all_capabilities_composed(self, unit_env):
        service = await unit_env.get(IdentityService)

        assert service.capabilities == frozenset(
            {
                AuthCapability.DATABASE_AUTHENTICATABLE,
                AuthCapability.RECOVERABLE,
                AuthCapability.REMEMBERABLE,
                AuthCapability.TRACKABLE,
                AuthCapability.OMNIAUTHABLE,
            }
        )

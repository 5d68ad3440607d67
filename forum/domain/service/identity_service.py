"""Identity and credential domain service."""

from datetime import datetime
from typing import Any, Callable, Mapping
from uuid import uuid4

import logfire

from forum.domain.error import AuthenticationError, NotFoundError, ValidationError
from forum.domain.model import Authorization, User
from forum.domain.repository import UserRepository
from forum.domain.value import AuthProvider, UserId, UserState

from .auth import (
    AuthCapability,
    DatabaseAuthenticatable,
    Omniauthable,
    Recoverable,
    Rememberable,
    Trackable,
    Validatable,
)
from .base import Service
from .mail_service import Mailer

# Fields a user may change on their own profile
PROFILE_FIELDS = frozenset(
    {"login", "email", "name", "location", "bio", "website", "github", "tagline"}
)
CREDENTIAL_FIELDS = ("current_password", "password", "password_confirmation")


class IdentityService(Service):
    """Domain service for sign-up, sign-in and credential management.

    Composes the authentication capability strategies; each public method
    maps to one flow the web layer or an OAuth callback drives.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        mailer: Mailer,
        database: DatabaseAuthenticatable,
        validatable: Validatable,
        recoverable: Recoverable,
        rememberable: Rememberable,
        trackable: Trackable,
        omniauthable: Omniauthable,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize identity service.

        Args:
            user_repository: User repository
            mailer: Outbound mail
            database: Password hashing strategy
            validatable: Field validation strategy
            recoverable: Password reset strategy
            rememberable: Remember-me strategy
            trackable: Sign-in tracking strategy
            omniauthable: External identity strategy
            clock: Source of the current time
        """
        self.user_repository = user_repository
        self.mailer = mailer
        self.database = database
        self.validatable = validatable
        self.recoverable = recoverable
        self.rememberable = rememberable
        self.trackable = trackable
        self.omniauthable = omniauthable
        self.clock = clock

    @property
    def capabilities(self) -> frozenset[AuthCapability]:
        """Capabilities this service was composed with."""
        return frozenset(
            strategy.capability
            for strategy in (
                self.database,
                self.recoverable,
                self.rememberable,
                self.trackable,
                self.omniauthable,
            )
        )

    async def find_for_authentication(self, login_or_email: str) -> User | None:
        """Find the account a sign-in form refers to.

        Matches login first, then email, both case-insensitively. Both
        lookups always run so the timing does not reveal which one hit.

        Args:
            login_or_email: What the user typed into the login box

        Returns:
            Matching user, None otherwise
        """
        with logfire.span("identity_service.find_for_authentication"):
            by_login = await self.user_repository.find_by_login(login_or_email)
            by_email = await self.user_repository.find_by_email(login_or_email)
            return by_login or by_email

    def password_required(self, user: User, password: str | None = None) -> bool:
        """Whether ``user`` must have a password.

        Guests never need one. Accounts bound to an external provider
        only need one once they start setting it.

        Args:
            user: User being validated
            password: New password being set, if any
        """
        if user.guest:
            return False
        if user.authorizations and not password:
            return False
        return True

    def is_bound(self, user: User, provider: AuthProvider) -> bool:
        """Whether ``user`` has any authorization for ``provider``."""
        return self.omniauthable.is_bound(user, provider)

    async def authenticate(
        self,
        login_or_email: str,
        password: str,
        ip: str | None = None,
        remember: bool = False,
    ) -> User:
        """Sign a user in with a password.

        Args:
            login_or_email: Login or email
            password: Plain password
            ip: Client address for sign-in tracking
            remember: Start a remembered session

        Returns:
            The signed-in user with tracking fields updated

        Raises:
            AuthenticationError: On bad credentials or an unusable account
        """
        with logfire.span("identity_service.authenticate", ip=ip):
            user = await self.find_for_authentication(login_or_email)
            valid = self.database.valid_password(user, password)
            if user is None or not valid:
                logfire.warn("Invalid credentials", ip=ip)
                raise AuthenticationError("Invalid login or password")

            if user.state != UserState.NORMAL:
                logfire.warn(
                    "Sign-in refused", user_id=str(user.id), state=user.state.name
                )
                raise AuthenticationError("Account is not active")

            now = self.clock()
            user = self.trackable.track_sign_in(user, ip, now)
            if remember:
                user = self.rememberable.remember_me(user, now)
            saved = await self.user_repository.save(user)
            logfire.info(
                "User signed in",
                user_id=str(saved.id),
                sign_in_count=saved.sign_in_count,
            )
            return saved

    async def register(
        self,
        login: str,
        email: str,
        password: str | None,
        password_confirmation: str | None = None,
        **profile: Any,
    ) -> User:
        """Create an account from the sign-up form.

        Args:
            login: Desired login
            email: Email address
            password: Plain password
            password_confirmation: Confirmation typed by the user
            **profile: Optional profile fields (name, location, ...)

        Returns:
            Created user

        Raises:
            ValidationError: With every failing field
        """
        with logfire.span("identity_service.register", login=login):
            user = User(
                id=UserId(uuid4()),
                login=login,
                email=email,
                **self._profile_updates(profile),
            )
            await self.validatable.validate(
                user,
                password=password,
                password_confirmation=password_confirmation,
                password_required=self.password_required(user, password),
            )
            if password:
                user = user.model_copy(
                    update={"password_hash": self.database.hash_password(password)}
                )
            return await self._create(user)

    async def register_from_oauth(
        self,
        provider: AuthProvider,
        uid: str,
        login: str,
        email: str,
        name: str | None = None,
    ) -> User:
        """Create a passwordless account bound to an external identity.

        Args:
            provider: Identity provider
            uid: User ID on the provider
            login: Desired login
            email: Email address
            name: Display name

        Returns:
            Created user, already bound to the provider

        Raises:
            ValidationError: With every failing field
        """
        with logfire.span(
            "identity_service.register_from_oauth", provider=provider.value, uid=uid
        ):
            now = self.clock()
            user = User(id=UserId(uuid4()), login=login, email=email, name=name)
            user, authorization = self.omniauthable.bind(user, provider, uid, now)
            await self.validatable.validate(
                user, password_required=self.password_required(user)
            )
            return await self._create(user, authorization)

    async def find_for_oauth(self, provider: AuthProvider, uid: str) -> User | None:
        """Find the user bound to (provider, uid)."""
        with logfire.span(
            "identity_service.find_for_oauth", provider=provider.value, uid=uid
        ):
            return await self.user_repository.find_by_authorization(provider, uid)

    async def bind(self, user_id: UserId, provider: AuthProvider, uid: str) -> User:
        """Bind an external identity to an existing account.

        Duplicates are not filtered: binding the same identity twice
        stores two authorization records.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "identity_service.bind", user_id=str(user_id), provider=provider.value
        ):
            user = await self._get(user_id)
            updated, authorization = self.omniauthable.bind(
                user, provider, uid, self.clock()
            )
            await self.user_repository.add_authorization(user_id, authorization)
            logfire.info(
                "Authorization bound",
                user_id=str(user_id),
                provider=provider.value,
                authorization_count=len(updated.authorizations),
            )
            return updated

    async def update_with_password(
        self, user_id: UserId, params: Mapping[str, Any]
    ) -> User:
        """Update a profile, changing the password only when asked to.

        If any of current_password, password or password_confirmation is
        non-empty, the current password must be correct and the new one
        valid. Otherwise the credential fields are dropped and the rest
        is applied as a plain profile update.

        Args:
            user_id: User being edited
            params: Submitted form fields

        Returns:
            Saved user

        Raises:
            NotFoundError: If user not found
            ValidationError: With every failing field
        """
        if not any(params.get(field) for field in CREDENTIAL_FIELDS):
            profile = {k: v for k, v in params.items() if k not in CREDENTIAL_FIELDS}
            return await self.update_without_password(user_id, profile)

        with logfire.span("identity_service.update_with_password", user_id=str(user_id)):
            user = await self._get(user_id)
            current_password = params.get("current_password") or ""
            password = params.get("password") or None
            confirmation = params.get("password_confirmation")

            updated = user.model_copy(update=self._profile_updates(params))

            errors: dict[str, list[str]] = {}
            if not current_password:
                errors["current_password"] = ["Current password can't be blank"]
            elif not self.database.valid_password(user, current_password):
                errors["current_password"] = ["Current password is invalid"]
            try:
                await self.validatable.validate(
                    updated,
                    password=password,
                    password_confirmation=confirmation,
                    password_required=self.password_required(updated, password),
                )
            except ValidationError as e:
                errors.update(e.errors)
            if errors:
                logfire.warn(
                    "Profile update rejected",
                    user_id=str(user_id),
                    fields=sorted(errors),
                )
                raise ValidationError(errors)

            if password:
                updated = updated.model_copy(
                    update={"password_hash": self.database.hash_password(password)}
                )
            updated = updated.model_copy(update={"updated_at": self.clock()})
            saved = await self.user_repository.save(updated)
            logfire.info(
                "Profile updated",
                user_id=str(user_id),
                password_changed=bool(password),
            )
            return saved

    async def update_without_password(
        self, user_id: UserId, params: Mapping[str, Any]
    ) -> User:
        """Apply profile fields, leaving credentials untouched.

        Raises:
            NotFoundError: If user not found
            ValidationError: With every failing field
        """
        with logfire.span(
            "identity_service.update_without_password", user_id=str(user_id)
        ):
            user = await self._get(user_id)
            updated = user.model_copy(
                update={**self._profile_updates(params), "updated_at": self.clock()}
            )
            await self.validatable.validate(updated)
            saved = await self.user_repository.save(updated)
            logfire.info("Profile updated", user_id=str(user_id), password_changed=False)
            return saved

    async def send_reset_password_instructions(self, email: str) -> None:
        """Issue a reset token and mail it, if the email belongs to a user.

        Unknown emails are ignored so the response does not reveal which
        addresses are registered.
        """
        with logfire.span("identity_service.send_reset_password_instructions"):
            user = await self.user_repository.find_by_email(email)
            if user is None or user.state == UserState.DELETED:
                logfire.info("Reset requested for unknown email")
                return
            user, raw_token = self.recoverable.generate_reset_token(user, self.clock())
            await self.user_repository.save(user)
            await self.mailer.send_reset_password_instructions(user, raw_token)
            logfire.info("Reset instructions sent", user_id=str(user.id))

    async def reset_password(
        self, raw_token: str, password: str, password_confirmation: str | None
    ) -> User:
        """Set a new password using a reset token.

        Raises:
            ValidationError: If the token is unknown or expired, or the
                new password is invalid
        """
        with logfire.span("identity_service.reset_password"):
            user = await self.user_repository.find_by_reset_password_token(
                self.recoverable.digest(raw_token)
            )
            if user is None:
                raise ValidationError.single("reset_password_token", "Token is invalid")
            if not self.recoverable.is_reset_period_valid(user, self.clock()):
                logfire.warn("Expired reset token used", user_id=str(user.id))
                raise ValidationError.single(
                    "reset_password_token", "Token has expired, please request a new one"
                )

            await self.validatable.validate(
                user,
                password=password,
                password_confirmation=password_confirmation,
                password_required=True,
            )
            updated = self.recoverable.clear_reset_token(user).model_copy(
                update={
                    "password_hash": self.database.hash_password(password),
                    "updated_at": self.clock(),
                }
            )
            saved = await self.user_repository.save(updated)
            logfire.info("Password reset", user_id=str(saved.id))
            return saved

    async def forget_me(self, user_id: UserId) -> User:
        """End a remembered session (sign-out)."""
        with logfire.span("identity_service.forget_me", user_id=str(user_id)):
            user = await self._get(user_id)
            return await self.user_repository.save(self.rememberable.forget_me(user))

    def is_remember_expired(self, user: User) -> bool:
        return self.rememberable.is_remember_expired(user, self.clock())

    async def _get(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def _create(
        self, user: User, authorization: Authorization | None = None
    ) -> User:
        """Persist a new user and send the welcome mail once."""
        now = self.clock()
        saved = await self.user_repository.save(
            user.model_copy(
                update={"state": UserState.NORMAL, "created_at": now, "updated_at": now}
            )
        )
        if authorization is not None:
            await self.user_repository.add_authorization(saved.id, authorization)
        await self.mailer.send_welcome(saved)
        logfire.info("User created", user_id=str(saved.id), login=saved.login)
        return saved

    @staticmethod
    def _profile_updates(params: Mapping[str, Any]) -> dict[str, Any]:
        ignored = set(params) - PROFILE_FIELDS - set(CREDENTIAL_FIELDS)
        if ignored:
            logfire.warn("Ignoring protected fields", fields=sorted(ignored))
        return {k: v for k, v in params.items() if k in PROFILE_FIELDS}

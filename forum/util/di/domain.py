"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from forum.config import AuthSettings, Settings
from forum.domain.cache import Cache
from forum.domain.repository import (
    FollowRepository,
    LikeRepository,
    LocationStatsRepository,
    NotificationRepository,
    UserRepository,
)
from forum.domain.service import (
    GitHubService,
    IdentityService,
    LikeService,
    LocationService,
    Mailer,
    ReadStateService,
    RepositoryListingClient,
    RoleService,
    SocialGraphService,
    UserService,
)
from forum.domain.service.auth import (
    DatabaseAuthenticatable,
    Omniauthable,
    Recoverable,
    Rememberable,
    Trackable,
    Validatable,
)
from forum.util.di.base import ProviderBase
from forum.util.di.core import Clock


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    The stateless capability strategies are built once per app.
    """

    scope = Scope.REQUEST

    # Capability strategies
    @provide(scope=Scope.APP)
    def get_database_authenticatable(
        self, auth_settings: AuthSettings
    ) -> DatabaseAuthenticatable:
        """Provide password hashing."""
        return DatabaseAuthenticatable(bcrypt_rounds=auth_settings.bcrypt_rounds)

    @provide(scope=Scope.APP)
    def get_recoverable(self, auth_settings: AuthSettings) -> Recoverable:
        """Provide reset token handling."""
        return Recoverable(
            reset_password_within=timedelta(
                hours=auth_settings.reset_password_within_hours
            )
        )

    @provide(scope=Scope.APP)
    def get_rememberable(self, auth_settings: AuthSettings) -> Rememberable:
        """Provide remember-me handling."""
        return Rememberable(remember_for=timedelta(days=auth_settings.remember_for_days))

    @provide(scope=Scope.APP)
    def get_trackable(self) -> Trackable:
        return Trackable()

    @provide(scope=Scope.APP)
    def get_omniauthable(self) -> Omniauthable:
        return Omniauthable()

    @provide
    def get_validatable(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> Validatable:
        """Provide field validation (needs the repository for uniqueness)."""
        return Validatable(
            user_repository=user_repository,
            password_min_length=auth_settings.password_min_length,
            password_max_length=auth_settings.password_max_length,
        )

    # Services
    @provide
    def get_identity_service(
        self,
        user_repository: UserRepository,
        mailer: Mailer,
        database: DatabaseAuthenticatable,
        validatable: Validatable,
        recoverable: Recoverable,
        rememberable: Rememberable,
        trackable: Trackable,
        omniauthable: Omniauthable,
        clock: Clock,
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            user_repository=user_repository,
            mailer=mailer,
            database=database,
            validatable=validatable,
            recoverable=recoverable,
            rememberable=rememberable,
            trackable=trackable,
            omniauthable=omniauthable,
            clock=clock,
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        settings: Settings,
        clock: Clock,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            notification_repository=notification_repository,
            mail_domain=settings.mail.mail_domain,
            clock=clock,
        )

    @provide
    def get_social_graph_service(
        self, follow_repository: FollowRepository, user_repository: UserRepository
    ) -> SocialGraphService:
        """Provide social graph domain service."""
        return SocialGraphService(
            follow_repository=follow_repository, user_repository=user_repository
        )

    @provide
    def get_like_service(
        self, like_repository: LikeRepository, clock: Clock
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(like_repository=like_repository, clock=clock)

    @provide(scope=Scope.APP)
    def get_role_service(self, auth_settings: AuthSettings) -> RoleService:
        """Provide role domain service."""
        return RoleService(admin_emails=auth_settings.admin_emails)

    @provide
    def get_read_state_service(self, cache: Cache, settings: Settings) -> ReadStateService:
        """Provide read state domain service."""
        ttl_days = settings.cache.read_state_ttl_days
        return ReadStateService(
            cache=cache, ttl=timedelta(days=ttl_days) if ttl_days else None
        )

    @provide
    def get_location_service(
        self,
        user_repository: UserRepository,
        location_stats_repository: LocationStatsRepository,
        settings: Settings,
    ) -> LocationService:
        """Provide location domain service."""
        return LocationService(
            user_repository=user_repository,
            location_stats_repository=location_stats_repository,
            reduce_batch_size=settings.locations.reduce_batch_size,
            top_limit=settings.locations.top_limit,
        )

    @provide
    def get_github_service(
        self, client: RepositoryListingClient, cache: Cache, settings: Settings
    ) -> GitHubService:
        """Provide GitHub listing service."""
        return GitHubService(
            client=client,
            cache=cache,
            limit=settings.github.repository_limit,
            ttl=timedelta(days=settings.github.cache_ttl_days),
            failure_ttl=timedelta(days=settings.github.failure_ttl_days),
        )

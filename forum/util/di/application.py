"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.auth import OAuthSignInUseCase, SignInUseCase
from forum.application.usecase.location import (
    ListHotLocationsUseCase,
    RefreshLocationsUseCase,
)
from forum.application.usecase.user import (
    DeleteAccountUseCase,
    GetUserProfileUseCase,
    RegisterUserUseCase,
    UpdateAccountUseCase,
)
from forum.domain.service import (
    GitHubService,
    IdentityService,
    LocationService,
    RoleService,
    SocialGraphService,
    UserService,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_in_use_case(self, identity_service: IdentityService) -> SignInUseCase:
        """Provide sign in use case."""
        return SignInUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_oauth_sign_in_use_case(
        self, identity_service: IdentityService
    ) -> OAuthSignInUseCase:
        """Provide OAuth sign in use case."""
        return OAuthSignInUseCase(identity_service=identity_service)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, identity_service: IdentityService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_update_account_use_case(
        self, identity_service: IdentityService
    ) -> UpdateAccountUseCase:
        """Provide update account use case."""
        return UpdateAccountUseCase(identity_service=identity_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self,
        user_service: UserService,
        role_service: RoleService,
        social_graph_service: SocialGraphService,
        github_service: GitHubService,
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service,
            role_service=role_service,
            social_graph_service=social_graph_service,
            github_service=github_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_account_use_case(
        self, user_service: UserService
    ) -> DeleteAccountUseCase:
        """Provide delete account use case."""
        return DeleteAccountUseCase(user_service=user_service)

    # Location use cases
    @provide(scope=Scope.REQUEST)
    def get_refresh_locations_use_case(
        self, location_service: LocationService
    ) -> RefreshLocationsUseCase:
        """Provide refresh locations use case."""
        return RefreshLocationsUseCase(location_service=location_service)

    @provide(scope=Scope.REQUEST)
    def get_list_hot_locations_use_case(
        self, location_service: LocationService
    ) -> ListHotLocationsUseCase:
        """Provide list hot locations use case."""
        return ListHotLocationsUseCase(location_service=location_service)

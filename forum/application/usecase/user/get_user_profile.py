"""Get user profile use case."""

from datetime import datetime

from pydantic import BaseModel

from forum.domain.service import GitHubService, RoleService, SocialGraphService, UserService
from forum.domain.value import GitHubRepository, Role, UserState


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    login: str
    include_repositories: bool = True


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user_id: str
    login: str
    name: str | None
    location: str | None
    bio: str | None
    website: str | None
    tagline: str | None
    github_url: str
    state: UserState
    roles: list[Role]
    topics_count: int
    replies_count: int
    following_count: int
    followers_count: int
    created_at: datetime
    repositories: list[GitHubRepository]


class GetUserProfileUseCase:
    """Use case for getting a user's public profile by login."""

    def __init__(
        self,
        user_service: UserService,
        role_service: RoleService,
        social_graph_service: SocialGraphService,
        github_service: GitHubService,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            role_service: Role domain service
            social_graph_service: Social graph domain service
            github_service: GitHub listing service
        """
        self.user_service = user_service
        self.role_service = role_service
        self.social_graph_service = social_graph_service
        self.github_service = github_service

    async def execute(
        self, request: GetUserProfileRequest
    ) -> GetUserProfileResponse | None:
        """Execute get user profile flow.

        Steps:
        1. Get user by login
        2. Resolve roles and follow counts
        3. Attach GitHub repositories (empty on fetch failure)

        Returns:
            User profile if user exists, None otherwise
        """
        user = await self.user_service.get_by_login(request.login)

        if not user:
            return None

        following = await self.social_graph_service.following(user.id)
        followers = await self.social_graph_service.followers(user.id)

        repositories: list[GitHubRepository] = []
        if request.include_repositories:
            repositories = await self.github_service.github_repositories(user)

        return GetUserProfileResponse(
            user_id=str(user.id),
            login=user.login,
            name=user.name,
            location=user.location,
            bio=user.bio,
            website=user.website,
            tagline=user.tagline,
            github_url=user.github_profile_url,
            state=user.state,
            roles=[role for role in Role if self.role_service.has_role(user, role)],
            topics_count=user.topics_count,
            replies_count=user.replies_count,
            following_count=len(following),
            followers_count=len(followers),
            created_at=user.created_at,
            repositories=repositories,
        )

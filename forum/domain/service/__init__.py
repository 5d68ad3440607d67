"""Domain services."""

from .base import Service
from .github_service import GitHubService, RepositoryListingClient
from .identity_service import IdentityService
from .like_service import LikeService
from .location_service import LocationService
from .mail_service import Mailer
from .read_state_service import ReadStateService
from .role_service import RoleService
from .social_graph_service import SocialGraphService
from .user_service import DELETED_LOGIN, UserService

__all__ = [
    "DELETED_LOGIN",
    "GitHubService",
    "IdentityService",
    "LikeService",
    "LocationService",
    "Mailer",
    "ReadStateService",
    "RepositoryListingClient",
    "RoleService",
    "Service",
    "SocialGraphService",
    "UserService",
]

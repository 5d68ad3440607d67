"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    LikeId,
    NodeId,
    NotificationId,
    ReplyId,
    TopicId,
    UserId,
)
from forum.domain.value.types import (
    AuthProvider,
    Email,
    GitHubRepository,
    LikeableRef,
    LikeableType,
    Login,
    NotifiableType,
    Role,
    UserState,
)

__all__ = [
    # Identifiers
    "UserId",
    "NodeId",
    "TopicId",
    "ReplyId",
    "LikeId",
    "NotificationId",
    # Types
    "AuthProvider",
    "Email",
    "GitHubRepository",
    "LikeableRef",
    "LikeableType",
    "Login",
    "NotifiableType",
    "Role",
    "UserState",
]

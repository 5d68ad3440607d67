"""User aggregate root.

Users sign in with a password or a bound external provider, follow each
other and nodes, like content and accumulate topic/reply counters.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.authorization import Authorization
from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, UserState


class User(DomainModel):
    """User aggregate root.

    Relations (follows, likes, notifications) live in their own
    repositories; only authorizations are embedded, since their lifetime
    is bound to the user.
    """

    id: UserId
    login: str
    email: str
    password_hash: Optional[str] = None
    guest: bool = False

    # Profile
    name: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None  # Bare username or full profile URL
    tagline: Optional[str] = None

    # Trust and lifecycle
    verified: bool = True
    state: UserState = UserState.NORMAL

    # Counters maintained by topic/reply/like writers
    topics_count: int = Field(default=0, ge=0)
    replies_count: int = Field(default=0, ge=0)
    likes_count: int = Field(default=0, ge=0)

    authorizations: list[Authorization] = Field(default_factory=list)

    # Recoverable
    reset_password_token: Optional[str] = None
    reset_password_sent_at: Optional[datetime] = None
    # Rememberable
    remember_created_at: Optional[datetime] = None
    # Trackable
    sign_in_count: int = Field(default=0, ge=0)
    current_sign_in_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    current_sign_in_ip: Optional[str] = None
    last_sign_in_ip: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def github_handle(self) -> str:
        """GitHub username, or "" when none is set.

        The stored value may be a bare username or a full URL; only the
        last path segment is used.
        """
        if not self.github or not self.github.strip():
            return ""
        return self.github.strip().rstrip("/").split("/")[-1]

    @property
    def github_profile_url(self) -> str:
        """Canonical GitHub profile URL, or "" when no handle is set."""
        if not self.github_handle:
            return ""
        return f"https://github.com/{self.github_handle}"

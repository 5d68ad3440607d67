"""Authorization entity.

Binds an external identity (provider + uid) to a user account.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import AuthProvider


class Authorization(DomainModel):
    """External identity embedded in a User."""

    provider: AuthProvider
    uid: str  # Permanent id on the provider side
    created_at: datetime = Field(default_factory=datetime.now)

"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Sequence
from uuid import UUID

from forum.domain.model import Authorization, Like, LocationStat, Notification, User
from forum.domain.value import (
    AuthProvider,
    LikeableType,
    LikeId,
    NotifiableType,
    NotificationId,
    UserId,
    UserState,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_authorization(row: Dict[str, Any]) -> Authorization:
    """Convert database row to Authorization domain model."""
    return Authorization(
        provider=AuthProvider(row["provider"]),
        uid=row["uid"],
        created_at=row["created_at"],
    )


def authorization_to_dict(user_id: UserId, authorization: Authorization) -> Dict[str, Any]:
    """Convert Authorization to a row of the authorizations table."""
    return {
        "user_id": user_id,
        "provider": authorization.provider.value,
        "uid": authorization.uid,
        "created_at": authorization.created_at,
    }


def row_to_user(
    row: Dict[str, Any], authorizations: Sequence[Authorization] = ()
) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict
        authorizations: Authorizations loaded from their own table

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        login=row["login"],
        email=row["email"],
        password_hash=row.get("password_hash"),
        guest=row.get("guest", False),
        name=row.get("name"),
        location=row.get("location"),
        bio=row.get("bio"),
        website=row.get("website"),
        github=row.get("github"),
        tagline=row.get("tagline"),
        verified=row.get("verified", True),
        state=UserState(row["state"]),
        topics_count=row.get("topics_count", 0),
        replies_count=row.get("replies_count", 0),
        likes_count=row.get("likes_count", 0),
        authorizations=list(authorizations),
        reset_password_token=row.get("reset_password_token"),
        reset_password_sent_at=row.get("reset_password_sent_at"),
        remember_created_at=row.get("remember_created_at"),
        sign_in_count=row.get("sign_in_count", 0),
        current_sign_in_at=row.get("current_sign_in_at"),
        last_sign_in_at=row.get("last_sign_in_at"),
        current_sign_in_ip=row.get("current_sign_in_ip"),
        last_sign_in_ip=row.get("last_sign_in_ip"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to a users table row.

    Authorizations are excluded; they live in their own table.
    """
    data = user.model_dump(exclude={"authorizations"})
    data["state"] = int(user.state)
    return data


def row_to_like(row: Dict[str, Any]) -> Like:
    """Convert database row to Like domain model."""
    return Like(
        id=LikeId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        likeable_type=LikeableType(row["likeable_type"]),
        likeable_id=_uuid(row["likeable_id"]),
        created_at=row["created_at"],
    )


def like_to_dict(like: Like) -> Dict[str, Any]:
    """Convert Like domain model to database dict."""
    data = like.model_dump()
    data["likeable_type"] = like.likeable_type.value
    return data


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        notifiable_type=NotifiableType(row["notifiable_type"]),
        notifiable_id=_uuid(row["notifiable_id"]),
        read=row["read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["notifiable_type"] = notification.notifiable_type.value
    return data


def row_to_location_stat(row: Dict[str, Any]) -> LocationStat:
    """Convert database row to LocationStat domain model."""
    return LocationStat(
        location=row["location"],
        count=row["count"],
        sample_logins=list(row.get("sample_logins") or []),
    )

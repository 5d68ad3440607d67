"""Builders for domain objects used across tests."""

from uuid import uuid4

from forum.domain.model import Topic, User
from forum.domain.service.auth import DatabaseAuthenticatable
from forum.domain.value import NodeId, ReplyId, TopicId, UserId

_hasher = DatabaseAuthenticatable(bcrypt_rounds=4)


def make_user(login: str = "alice", password: str | None = None, **fields) -> User:
    """Build a user; email defaults to ``{login}@example.com``.

    Args:
        login: Login
        password: Plain password to hash into ``password_hash``
        **fields: Any other User field
    """
    fields.setdefault("email", f"{login.lower()}@example.com")
    if password is not None:
        fields["password_hash"] = _hasher.hash_password(password)
    return User(id=UserId(uuid4()), login=login, **fields)


def make_topic(user_id: UserId, last_reply_id: ReplyId | None = None) -> Topic:
    return Topic(
        id=TopicId(uuid4()),
        user_id=user_id,
        node_id=NodeId(uuid4()),
        title="How do I profile a slow request?",
        last_reply_id=last_reply_id,
    )

"""Integration tests for PostgresLikeRepository."""

from uuid import uuid4

import pytest

from forum.domain.model import Like
from forum.domain.repository import LikeRepository
from forum.domain.value import LikeableType, LikeId, UserId
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def _like(user_id: UserId, likeable_id) -> Like:
    return Like(
        id=LikeId(uuid4()),
        user_id=user_id,
        likeable_type=LikeableType.TOPIC,
        likeable_id=likeable_id,
    )


class TestPostgresLikeRepository:
    """Integration tests for PostgresLikeRepository."""

    @pytest.mark.asyncio
    async def test_find_by_user_and_likeable(self, integration_env):
        # Arrange
        repo = await integration_env.get(LikeRepository)
        user_id = UserId(uuid4())
        topic_id = uuid4()
        like = await repo.save(_like(user_id, topic_id))

        # Act
        found = await repo.find_by_user_and_likeable(
            user_id, LikeableType.TOPIC, topic_id
        )
        other_type = await repo.find_by_user_and_likeable(
            user_id, LikeableType.REPLY, topic_id
        )

        # Assert
        assert found is not None and found.id == like.id
        assert other_type is None

    @pytest.mark.asyncio
    async def test_delete_removes_every_duplicate(self, integration_env):
        """The table has no unique constraint, so duplicates all go at once."""
        # Arrange
        repo = await integration_env.get(LikeRepository)
        user_id = UserId(uuid4())
        topic_id = uuid4()
        await repo.save(_like(user_id, topic_id))
        await repo.save(_like(user_id, topic_id))
        await repo.save(_like(user_id, uuid4()))

        # Act
        removed = await repo.delete_by_user_and_likeable(
            user_id, LikeableType.TOPIC, topic_id
        )

        # Assert
        assert removed == 2
        assert len(await repo.find_by_user(user_id)) == 1

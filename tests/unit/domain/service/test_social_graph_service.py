"""Unit tests for SocialGraphService."""

from uuid import uuid4

import pytest

from forum.domain.error import NotFoundError
from forum.domain.repository import UserRepository
from forum.domain.service import SocialGraphService
from forum.domain.value import NodeId, UserId
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUserFollows:
    """Tests for following users."""

    @pytest.mark.asyncio
    async def test_follow_is_visible_from_both_sides(self, unit_env):
        """Should list B in A's following and A in B's followers at once."""
        # Arrange
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("bob"))

        # Act
        await service.follow(alice.id, bob.id)

        # Assert
        assert [u.id for u in await service.following(alice.id)] == [bob.id]
        assert [u.id for u in await service.followers(bob.id)] == [alice.id]
        assert await service.is_following(alice.id, bob.id)
        assert not await service.is_following(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_follow_twice_keeps_one_edge(self, unit_env):
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("bob"))

        await service.follow(alice.id, bob.id)
        await service.follow(alice.id, bob.id)

        assert len(await service.followers(bob.id)) == 1

    @pytest.mark.asyncio
    async def test_unfollow_removes_both_sides(self, unit_env):
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        bob = await user_repo.save(make_user("bob"))
        await service.follow(alice.id, bob.id)

        removed = await service.unfollow(alice.id, bob.id)

        assert removed is True
        assert await service.following(alice.id) == []
        assert await service.followers(bob.id) == []
        assert await service.unfollow(alice.id, bob.id) is False

    @pytest.mark.asyncio
    async def test_follow_unknown_user(self, unit_env):
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))

        with pytest.raises(NotFoundError):
            await service.follow(alice.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_self_follow_is_allowed(self, unit_env):
        """Should not guard against following oneself."""
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))

        await service.follow(alice.id, alice.id)

        assert await service.is_following(alice.id, alice.id)


class TestNodeFollows:
    """Tests for following nodes."""

    @pytest.mark.asyncio
    async def test_follow_and_unfollow_node(self, unit_env):
        service = await unit_env.get(SocialGraphService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user("alice"))
        node_id = NodeId(uuid4())

        await service.follow_node(alice.id, node_id)
        assert await service.following_nodes(alice.id) == [node_id]
        assert await service.node_followers(node_id) == [alice.id]

        assert await service.unfollow_node(alice.id, node_id) is True
        assert await service.following_nodes(alice.id) == []
        assert await service.node_followers(node_id) == []

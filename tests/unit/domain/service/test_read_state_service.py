"""Unit tests for ReadStateService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from forum.adapter.cache import InMemoryCache
from forum.domain.service import ReadStateService
from forum.domain.value import ReplyId, UserId
from tests.factories import make_topic
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestReadState:
    """Tests for topic read markers."""

    @pytest.mark.asyncio
    async def test_unread_by_default(self, unit_env):
        service = await unit_env.get(ReadStateService)
        user_id = UserId(uuid4())

        assert not await service.is_topic_read(user_id, make_topic(user_id))

    @pytest.mark.asyncio
    async def test_mark_then_read(self, unit_env):
        """Should report a topic read after marking it."""
        service = await unit_env.get(ReadStateService)
        user_id = UserId(uuid4())
        topic = make_topic(user_id, last_reply_id=ReplyId(uuid4()))

        await service.mark_topic_read(user_id, topic)

        assert await service.is_topic_read(user_id, topic)

    @pytest.mark.asyncio
    async def test_new_reply_makes_topic_unread(self, unit_env):
        """Should turn unread when the last reply changes, with no invalidation."""
        service = await unit_env.get(ReadStateService)
        user_id = UserId(uuid4())
        topic = make_topic(user_id, last_reply_id=ReplyId(uuid4()))
        await service.mark_topic_read(user_id, topic)

        replied = topic.model_copy(update={"last_reply_id": ReplyId(uuid4())})

        assert not await service.is_topic_read(user_id, replied)

    @pytest.mark.asyncio
    async def test_first_reply_after_reading_empty_topic(self, unit_env):
        """Should turn unread when a topic read without replies gets one."""
        service = await unit_env.get(ReadStateService)
        user_id = UserId(uuid4())
        topic = make_topic(user_id)
        await service.mark_topic_read(user_id, topic)
        assert await service.is_topic_read(user_id, topic)

        replied = topic.model_copy(update={"last_reply_id": ReplyId(uuid4())})

        assert not await service.is_topic_read(user_id, replied)

    @pytest.mark.asyncio
    async def test_markers_are_per_user(self, unit_env):
        service = await unit_env.get(ReadStateService)
        alice, bob = UserId(uuid4()), UserId(uuid4())
        topic = make_topic(alice, last_reply_id=ReplyId(uuid4()))

        await service.mark_topic_read(alice, topic)

        assert not await service.is_topic_read(bob, topic)

    @pytest.mark.asyncio
    async def test_expired_marker_reads_as_unread(self):
        """Should treat a marker past its lifetime as unread."""
        now = [0.0]
        service = ReadStateService(
            InMemoryCache(clock=lambda: now[0]), ttl=timedelta(days=1)
        )
        user_id = UserId(uuid4())
        topic = make_topic(user_id, last_reply_id=ReplyId(uuid4()))
        await service.mark_topic_read(user_id, topic)

        now[0] += timedelta(days=2).total_seconds()

        assert not await service.is_topic_read(user_id, topic)

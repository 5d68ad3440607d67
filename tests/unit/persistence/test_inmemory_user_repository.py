"""Unit tests for the in-memory user repository's uniqueness rules."""

import pytest

from forum.domain.error import ValidationError
from forum.domain.value import UserState
from forum.persistence.repository.inmemory import InMemoryUserRepository
from tests.factories import make_user


class TestUniqueLiveAccounts:
    """Saves that bypass validation still cannot duplicate a live login or email."""

    @pytest.mark.asyncio
    async def test_duplicate_login_rejected_on_save(self):
        repo = InMemoryUserRepository()
        await repo.save(make_user("alice"))

        with pytest.raises(ValidationError) as exc_info:
            await repo.save(make_user("ALICE", email="other@example.com"))

        assert exc_info.value.errors == {"login": ["Login has already been taken"]}

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_on_save(self):
        repo = InMemoryUserRepository()
        await repo.save(make_user("alice", email="a@example.com"))

        with pytest.raises(ValidationError) as exc_info:
            await repo.save(make_user("bob", email="A@Example.com"))

        assert "email" in exc_info.value.errors

    @pytest.mark.asyncio
    async def test_deleted_accounts_may_share_login(self):
        repo = InMemoryUserRepository()
        await repo.save(make_user("Guest", email="a@x.org", state=UserState.DELETED))
        await repo.save(make_user("Guest", email="b@x.org", state=UserState.DELETED))
        live = await repo.save(make_user("guest"))

        assert (await repo.find_by_login("Guest")).id == live.id

    @pytest.mark.asyncio
    async def test_resaving_same_user_is_allowed(self):
        repo = InMemoryUserRepository()
        user = await repo.save(make_user("alice"))

        await repo.save(user.model_copy(update={"bio": "hi"}))

        assert (await repo.find_by_id(user.id)).bio == "hi"

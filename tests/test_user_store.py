"""
Tests for the credential store.
"""

import pytest

from core.errors import ConflictError, NotFoundError
from database.users import create_user, find_user_by_username, list_users


class TestCredentialStore:
    @pytest.mark.asyncio
    async def test_create_then_find(self, session):
        user = await create_user(session, "alice", "digest", "a@x.com")
        await session.commit()
        assert user.id is not None

        found = await find_user_by_username(session, "alice")
        assert found.id == user.id
        assert found.username == "alice"
        assert found.email == "a@x.com"

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, session):
        await create_user(session, "alice", "digest", "a@x.com")
        await session.commit()
        with pytest.raises(ConflictError):
            await create_user(session, "alice", "digest", "other@x.com")
        await session.rollback()

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, session):
        await create_user(session, "alice", "digest", "a@x.com")
        await session.commit()
        with pytest.raises(ConflictError):
            await create_user(session, "bob", "digest", "a@x.com")
        await session.rollback()

    @pytest.mark.asyncio
    async def test_missing_username_not_found(self, session):
        with pytest.raises(NotFoundError):
            await find_user_by_username(session, "nobody")

    @pytest.mark.asyncio
    async def test_anonymous_profile_user_has_no_credentials(self, session):
        user = await create_user(session, "Huzaifa")
        await session.commit()
        assert user.password_hash is None
        assert user.email is None

    @pytest.mark.asyncio
    async def test_list_users_in_registration_order(self, session):
        assert await list_users(session) == []
        await create_user(session, "alice", "d", "a@x.com")
        await create_user(session, "bob", "d", "b@x.com")
        await session.commit()
        assert [u.username for u in await list_users(session)] == ["alice", "bob"]

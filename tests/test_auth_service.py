"""
Tests for the sign-in flow.
"""

import pytest

from core.errors import ConflictError, InvalidCredentials
from database.users import create_user


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_register_then_authenticate(self, session, auth_service):
        user, token = await auth_service.register(session, "alice", "secret123", "a@x.com")
        await session.commit()
        assert token
        assert auth_service.issuer.verify(token).sub == str(user.id)

        signed_in, token2 = await auth_service.authenticate(session, "alice", "secret123")
        assert signed_in.id == user.id
        assert token2

    @pytest.mark.asyncio
    async def test_register_stores_digest_not_plaintext(self, session, auth_service):
        user, _ = await auth_service.register(session, "alice", "secret123", "a@x.com")
        assert user.password_hash != "secret123"
        assert auth_service.hasher.verify("secret123", user.password_hash)

    @pytest.mark.asyncio
    async def test_register_conflict(self, session, auth_service):
        await auth_service.register(session, "alice", "secret123", "a@x.com")
        await session.commit()
        with pytest.raises(ConflictError):
            await auth_service.register(session, "alice", "other", "z@x.com")
        await session.rollback()

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_identical(self, session, auth_service):
        await auth_service.register(session, "alice", "secret123", "a@x.com")
        await session.commit()

        with pytest.raises(InvalidCredentials) as wrong_password:
            await auth_service.authenticate(session, "alice", "wrong")
        with pytest.raises(InvalidCredentials) as unknown_user:
            await auth_service.authenticate(session, "mallory", "secret123")

        assert type(wrong_password.value) is type(unknown_user.value)
        assert str(wrong_password.value) == str(unknown_user.value)
        assert wrong_password.value.status_code == unknown_user.value.status_code == 401

    @pytest.mark.asyncio
    async def test_user_without_password_cannot_sign_in(self, session, auth_service):
        await create_user(session, "Huzaifa")
        await session.commit()
        with pytest.raises(InvalidCredentials):
            await auth_service.authenticate(session, "Huzaifa", "anything")

    @pytest.mark.asyncio
    async def test_malformed_digest_is_invalid_credentials(self, session, auth_service):
        await create_user(session, "broken", "not-a-bcrypt-hash", "b@x.com")
        await session.commit()
        with pytest.raises(InvalidCredentials):
            await auth_service.authenticate(session, "broken", "anything")

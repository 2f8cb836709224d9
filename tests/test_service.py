"""
Tests for ``AuthService`` against an in-memory repository.
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from auth.errors import AuthError, ConflictError, StoreError
from auth.password import verify_password
from auth.schemas import LoginRequest, RegisterRequest
from auth.service import INVALID_CREDENTIALS, REGISTERED, AuthService

ALICE = {
    "name": "Alice Doe",
    "email": "alice@example.com",
    "password": "secret1",
    "confirmPassword": "secret1",
}


def _register_req(**overrides) -> RegisterRequest:
    return RegisterRequest.model_validate({**ALICE, **overrides})


def _login_req(email="alice@example.com", password="secret1") -> LoginRequest:
    return LoginRequest(email=email, password=password)


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_one_user_with_hashed_password(self, service, memory_repo):
        result = await service.register(_register_req())

        assert result.message == REGISTERED
        assert list(memory_repo.users) == ["alice@example.com"]
        stored = memory_repo.users["alice@example.com"]
        assert stored.name == "Alice Doe"
        assert isinstance(stored.id, uuid.UUID)
        assert stored.password != "secret1"
        assert verify_password("secret1", stored.password)

    @pytest.mark.asyncio
    async def test_response_carries_no_user_data(self, service):
        result = await service.register(_register_req())
        assert result.model_dump() == {"message": REGISTERED}

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, service, memory_repo):
        await service.register(_register_req())
        with pytest.raises(ConflictError, match="Email já cadastrado"):
            await service.register(_register_req(name="Another Alice"))
        assert len(memory_repo.users) == 1
        assert memory_repo.users["alice@example.com"].name == "Alice Doe"

    @pytest.mark.asyncio
    async def test_distinct_ids(self, service, memory_repo):
        await service.register(_register_req())
        await service.register(_register_req(email="bob@example.com"))
        ids = {u.id for u in memory_repo.users.values()}
        assert len(ids) == 2

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, token_issuer):
        repo = AsyncMock()
        repo.find_by_email.return_value = None
        repo.save.side_effect = StoreError("Erro ao acessar o banco de dados")
        svc = AuthService(repo, token_issuer, bcrypt_rounds=4)

        with pytest.raises(StoreError):
            await svc.register(_register_req())


class TestLogin:
    @pytest.mark.asyncio
    async def test_correct_credentials(self, service, memory_repo, token_issuer):
        await service.register(_register_req())
        stored = memory_repo.users["alice@example.com"]

        result = await service.login(_login_req())

        assert result.user.id == stored.id
        assert result.user.name == "Alice Doe"
        assert result.user.email == "alice@example.com"
        assert "password" not in result.user.model_dump()
        assert token_issuer.verify(result.token)["id"] == str(stored.id)

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_match(self, service):
        await service.register(_register_req())

        with pytest.raises(AuthError) as unknown:
            await service.login(_login_req(email="nobody@example.com"))
        with pytest.raises(AuthError) as wrong:
            await service.login(_login_req(password="wrong12"))

        assert unknown.value.message == wrong.value.message == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempt", ["secret2", "Secret1", "secret1 ", "secret"])
    async def test_only_registered_password_logs_in(self, service, attempt):
        await service.register(_register_req())
        assert (await service.login(_login_req())).token
        with pytest.raises(AuthError):
            await service.login(_login_req(password=attempt))

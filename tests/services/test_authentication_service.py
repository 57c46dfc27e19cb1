"""Tests for user registration, login validation and token issue."""

import pytest

from common.config import get_config
from polyclinic.auth import decode_token
from polyclinic.core import OutcomeStatus
from polyclinic.db.schemas import AuthenticationRequest, UserCreate
from polyclinic.services.v1 import AuthenticationService

PASSWORD = "Clinic#2024"


def new_user(user_name: str = "asha", email: str = "asha@example.com") -> UserCreate:
    return UserCreate(
        user_name=user_name,
        email=email,
        password=PASSWORD,
        first_name="Asha",
        last_name="Verma",
    )


@pytest.fixture
def service(db_session) -> AuthenticationService:
    return AuthenticationService(db_session, get_config().jwt)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_registers_user(self, service):
        outcome = await service.create_user(new_user())

        assert outcome.status is OutcomeStatus.CREATED
        assert outcome.value == "asha"

    @pytest.mark.asyncio
    async def test_duplicate_user_name(self, service):
        await service.create_user(new_user())

        outcome = await service.create_user(new_user(email="other@example.com"))

        assert outcome.status is OutcomeStatus.CONFLICT

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        await service.create_user(new_user())

        outcome = await service.create_user(new_user(user_name="asha2"))

        assert outcome.status is OutcomeStatus.CONFLICT


class TestValidateLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials_return_email(self, service):
        await service.create_user(new_user())

        outcome = await service.validate_login(
            AuthenticationRequest(user_name="asha", password=PASSWORD)
        )

        assert outcome.status is OutcomeStatus.FOUND
        assert outcome.value == "asha@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await service.create_user(new_user())

        outcome = await service.validate_login(
            AuthenticationRequest(user_name="asha", password="Wrong#2024")
        )

        assert outcome.status is OutcomeStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        outcome = await service.validate_login(
            AuthenticationRequest(user_name="nobody", password=PASSWORD)
        )

        assert outcome.status is OutcomeStatus.NOT_FOUND


class TestCreateToken:
    @pytest.mark.asyncio
    async def test_token_carries_user_claims(self, service):
        response = service.create_token("asha", "asha@example.com")

        claims = decode_token(get_config().jwt, response.token)

        assert claims["unique_name"] == "asha"
        assert claims["email"] == "asha@example.com"
        assert int(response.expiration.timestamp()) == claims["exp"]

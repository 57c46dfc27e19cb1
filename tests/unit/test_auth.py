"""Tests for password hashing and bearer token helpers."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import SecretStr, ValidationError

from common.api_error import AuthenticationError
from common.config import JwtConfig
from polyclinic.auth import create_token, decode_token, hash_password, verify_password
from polyclinic.db.schemas import UserCreate

SECRET = "unit-test-secret-key-with-enough-length"


@pytest.fixture
def jwt_config() -> JwtConfig:
    return JwtConfig(
        secret_key=SecretStr(SECRET),
        issuer="polyclinic",
        audience="polyclinic-clients",
        subject="access",
        expiration_minutes=2,
    )


class TestPasswords:
    def test_hash_verifies_against_original(self):
        hashed = hash_password("S3cret!pw")

        assert hashed != "S3cret!pw"
        assert verify_password("S3cret!pw", hashed) is True
        assert verify_password("S3cret!pX", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("S3cret!pw") != hash_password("S3cret!pw")

    def test_garbage_hash_does_not_verify(self):
        assert verify_password("S3cret!pw", "not-a-bcrypt-hash") is False


class TestTokens:
    def test_claims(self, jwt_config):
        token, expiration = create_token(jwt_config, "asha", "asha@example.com")

        claims = decode_token(jwt_config, token)

        assert claims["sub"] == "access"
        assert claims["iss"] == "polyclinic"
        assert claims["aud"] == "polyclinic-clients"
        assert claims["unique_name"] == "asha"
        assert claims["email"] == "asha@example.com"
        assert claims["jti"]
        assert claims["exp"] == int(expiration.timestamp())
        assert claims["exp"] - claims["iat"] == 120

    def test_each_token_has_unique_id(self, jwt_config):
        first, _ = create_token(jwt_config, "asha", "asha@example.com")
        second, _ = create_token(jwt_config, "asha", "asha@example.com")

        assert decode_token(jwt_config, first)["jti"] != decode_token(jwt_config, second)["jti"]

    def test_expired_token_rejected(self, jwt_config):
        past = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = jwt.encode(
            {
                "sub": "access",
                "iat": int(past.timestamp()),
                "exp": int((past + timedelta(minutes=2)).timestamp()),
                "iss": "polyclinic",
                "aud": "polyclinic-clients",
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(jwt_config, token)
        assert exc_info.value.status_code == 401

    def test_wrong_audience_rejected(self, jwt_config):
        token, _ = create_token(jwt_config, "asha", "asha@example.com")
        other = jwt_config.model_copy(update={"audience": "someone-else"})

        with pytest.raises(AuthenticationError):
            decode_token(other, token)

    def test_wrong_issuer_rejected(self, jwt_config):
        token, _ = create_token(jwt_config, "asha", "asha@example.com")
        other = jwt_config.model_copy(update={"issuer": "someone-else"})

        with pytest.raises(AuthenticationError):
            decode_token(other, token)

    def test_tampered_signature_rejected(self, jwt_config):
        token, _ = create_token(jwt_config, "asha", "asha@example.com")
        other = jwt_config.model_copy(
            update={"secret_key": SecretStr("a-completely-different-secret-key-value")}
        )

        with pytest.raises(AuthenticationError):
            decode_token(other, token)

    def test_short_secret_rejected_by_config(self):
        with pytest.raises(ValidationError):
            JwtConfig(secret_key=SecretStr("short"), issuer="i", audience="a", subject="s")


class TestPasswordPolicy:
    def _user(self, password: str) -> UserCreate:
        return UserCreate(
            user_name="asha",
            email="asha@example.com",
            password=password,
            first_name="Asha",
            last_name="Verma",
        )

    def test_strong_password_accepted(self):
        assert self._user("Abc12#").password == "Abc12#"

    @pytest.mark.parametrize(
        "password",
        [
            "Ab1#",  # too short
            "abcdef1#",  # no uppercase
            "ABCDEF1#",  # no lowercase
            "Abcdefg#",  # no digit
            "Abcdefg1",  # no symbol
            "A1#" + "a" * 70,  # too long
        ],
    )
    def test_weak_password_rejected(self, password):
        with pytest.raises(ValidationError):
            self._user(password)

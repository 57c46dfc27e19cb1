# polyclinic/auth/jwt_tokens.py
"""
Issue and validate HS256 bearer tokens.

Claims: ``sub`` (configured subject), ``jti``, ``iat``, ``exp``, ``iss``,
``aud``, ``unique_name`` and ``email``.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple
from uuid import uuid4

from jose import JWTError, jwt

from common.api_error import AuthenticationError
from common.config import JwtConfig


def create_token(config: JwtConfig, user_name: str, email: str) -> Tuple[str, datetime]:
    """
    Returns:
        (encoded token, expiration instant in UTC)
    """
    issued_at = datetime.now(timezone.utc)
    expiration = issued_at + timedelta(minutes=config.expiration_minutes)

    claims: Dict[str, Any] = {
        "sub": config.subject,
        "jti": str(uuid4()),
        "iat": int(issued_at.timestamp()),
        "exp": int(expiration.timestamp()),
        "iss": config.issuer,
        "aud": config.audience,
        "unique_name": user_name,
        "email": email,
    }
    token = jwt.encode(
        claims, config.secret_key.get_secret_value(), algorithm=config.algorithm
    )
    return token, expiration


def decode_token(config: JwtConfig, token: str) -> Dict[str, Any]:
    """
    Verify signature, issuer, audience and expiry (no leeway).

    Raises:
        AuthenticationError: for any invalid or expired token
    """
    try:
        return jwt.decode(
            token,
            config.secret_key.get_secret_value(),
            algorithms=[config.algorithm],
            audience=config.audience,
            issuer=config.issuer,
            options={"leeway": 0, "require_exp": True},
        )
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e


__all__ = ["create_token", "decode_token"]

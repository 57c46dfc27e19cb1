# polyclinic/api/deps.py
from typing import Any, Dict, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from common.api_error import AuthenticationError
from common.config import get_config
from polyclinic.auth import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """
    Claims of a valid bearer token.

    The caller's user name is left on ``request.state`` for the request log.

    Raises:
        AuthenticationError: 401 when the header is missing or the token
        fails validation
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")
    claims = decode_token(get_config().jwt, credentials.credentials)
    request.state.user_name = claims.get("unique_name")
    return claims


__all__ = ["bearer_scheme", "get_current_user"]

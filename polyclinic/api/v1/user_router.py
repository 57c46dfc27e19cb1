# polyclinic/api/v1/user_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from common.api_error import AuthenticationError, ConflictError
from common.config import get_config
from polyclinic.core import OutcomeStatus
from polyclinic.db import get_db
from polyclinic.db.schemas import (
    AuthenticationRequest,
    AuthenticationResponse,
    MessageResponse,
    UserCreate,
)
from polyclinic.services.v1 import AuthenticationService
from .outcome_errors import raise_for_outcome

user_router = APIRouter(prefix="/users", tags=["Users"])


def _service(db: AsyncSession) -> AuthenticationService:
    return AuthenticationService(db, get_config().jwt)


@user_router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def register(user: UserCreate, db: AsyncSession = Depends(get_db)):
    outcome = await _service(db).create_user(user)
    if outcome.status is OutcomeStatus.CONFLICT:
        raise ConflictError("User name or email already registered", code="USER_EXISTS")
    if not outcome.ok:
        raise_for_outcome(outcome, "User")
    return MessageResponse(message=f"User {outcome.value} registered")


@user_router.post(
    "/login",
    response_model=AuthenticationResponse,
    summary="Exchange credentials for a bearer token",
    responses={400: {"description": "INVALID_CREDENTIALS"}},
)
async def login(request: AuthenticationRequest, db: AsyncSession = Depends(get_db)):
    service = _service(db)
    outcome = await service.validate_login(request)
    if outcome.status is OutcomeStatus.NOT_FOUND:
        raise AuthenticationError(
            "Invalid user name or password",
            status_code=400,
            code="INVALID_CREDENTIALS",
        )
    if not outcome.ok:
        raise_for_outcome(outcome, "User")
    return service.create_token(request.user_name, outcome.value)


__all__ = ["user_router"]

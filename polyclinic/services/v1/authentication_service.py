# polyclinic/services/v1/authentication_service.py
import asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from common import get_app_logger
from common.config import JwtConfig
from polyclinic.auth import create_token, hash_password, verify_password
from polyclinic.core import Outcome
from polyclinic.db.models import User
from polyclinic.db.repositories import UserRepository
from polyclinic.db.schemas import (
    AuthenticationRequest,
    AuthenticationResponse,
    UserCreate,
)
from .base_service import BaseService, STORAGE_FAULTS


class AuthenticationService(BaseService):
    logger = get_app_logger(__name__)

    def __init__(self, db: AsyncSession, jwt_config: JwtConfig):
        super().__init__(db)
        self.users = UserRepository(db)
        self.jwt_config = jwt_config

    async def create_user(self, user: UserCreate) -> Outcome[str]:
        """Created(user_name), or Conflict when the name or email is taken."""
        self.logger.debug("Registering user", user_name=user.user_name)
        try:
            if await self.users.is_taken(user.user_name, user.email):
                self.logger.warning("User name or email already registered", user_name=user.user_name)
                return Outcome.conflict()

            # bcrypt is CPU bound; keep it off the event loop
            password_hash = await asyncio.to_thread(hash_password, user.password)
            await self.users.add(
                User(
                    user_name=user.user_name,
                    email=user.email,
                    password_hash=password_hash,
                    first_name=user.first_name,
                    last_name=user.last_name,
                )
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            self.logger.warning("User registration lost a uniqueness race", user_name=user.user_name)
            return Outcome.conflict()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("create_user", e, user_name=user.user_name)

        self.logger.info("User registered", user_name=user.user_name)
        return Outcome.created(user.user_name)

    async def validate_login(self, request: AuthenticationRequest) -> Outcome[str]:
        """Found(email) when the credentials match, NotFound otherwise."""
        self.logger.debug("Validating login", user_name=request.user_name)
        try:
            user = await self.users.get_by_user_name(request.user_name)
        except STORAGE_FAULTS as e:
            return await self._storage_failure("validate_login", e, user_name=request.user_name)

        if user is None or not await asyncio.to_thread(
            verify_password, request.password, user.password_hash
        ):
            self.logger.warning("Invalid login attempt", user_name=request.user_name)
            return Outcome.not_found()

        return Outcome.found(user.email)

    def create_token(self, user_name: str, email: str) -> AuthenticationResponse:
        token, expiration = create_token(self.jwt_config, user_name, email)
        self.logger.info("Token issued", user_name=user_name, expires=expiration.isoformat())
        return AuthenticationResponse(token=token, expiration=expiration)


__all__ = ["AuthenticationService"]

# polyclinic/db/schemas/user_schemas.py
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    user_name: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=100, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        """
        Require a digit, a lowercase letter, an uppercase letter and
        one character that is neither letter nor digit.
        """
        missing = []
        if not any(c.isdigit() for c in v):
            missing.append("a digit")
        if not any(c.islower() for c in v):
            missing.append("a lowercase letter")
        if not any(c.isupper() for c in v):
            missing.append("an uppercase letter")
        if all(c.isalnum() for c in v):
            missing.append("a non-alphanumeric character")
        if missing:
            raise ValueError("Password must contain " + ", ".join(missing))
        return v


class AuthenticationRequest(BaseModel):
    user_name: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)


class AuthenticationResponse(BaseModel):
    token: str
    expiration: datetime


class MessageResponse(BaseModel):
    message: str


__all__ = [
    "UserCreate",
    "AuthenticationRequest",
    "AuthenticationResponse",
    "MessageResponse",
]

# Pydantic schemas (request/response)
from pydantic import BaseModel, field_validator
from typing import Any, Optional

from shifttrack.models.user import UserRole


class LoginRequest(BaseModel):
    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_number(cls, value: Any) -> Any:
        # Clients sometimes send the identifier as a JSON number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class LoginResponse(BaseModel):
    token: str
    name: str
    user_id: int
    role: UserRole


class Identity(BaseModel):
    """Identity decoded from a verified credential."""

    user_id: int
    role: Optional[UserRole] = None


class MessageResponse(BaseModel):
    message: str

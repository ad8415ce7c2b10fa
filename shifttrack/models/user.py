# User model (rows are created out-of-band, read-only here)
from pydantic import BaseModel
import enum


class UserRole(str, enum.Enum):
    DRIVER = "driver"
    ADMIN = "admin"


class User(BaseModel):
    id: int
    unique_id: str
    name: str
    role: UserRole = UserRole.DRIVER

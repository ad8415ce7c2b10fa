# Settings (Pydantic BaseSettings)
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List

from shifttrack.core.policy import Capability
from shifttrack.models.shift import ShiftVariant


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10

    # JWT settings
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_HOURS: int = 1

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Active shift record shape
    SHIFT_VARIANT: ShiftVariant = ShiftVariant.ITINERARY

    # Per-route capability overrides, e.g. {"export": "public"}
    ROUTE_POLICY: Dict[str, Capability] = {}

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

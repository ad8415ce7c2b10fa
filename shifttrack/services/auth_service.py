# Authentication logic
import logging
from typing import Optional

from shifttrack.core.config import Settings
from shifttrack.core.errors import AuthenticationError, ValidationError
from shifttrack.core.security import create_access_token
from shifttrack.db.store import ShiftStore
from shifttrack.models.schemas import LoginResponse
from shifttrack.models.user import User

logger = logging.getLogger(__name__)


async def authenticate_user(store: ShiftStore, unique_id: str) -> Optional[User]:
    """Look up a user by public identifier.

    Returns User object if the identifier exists, None otherwise.
    """
    row = await store.find_user_by_unique_id(unique_id)

    if not row:
        return None

    return User(**row)


async def login(store: ShiftStore, identifier: Optional[str], settings: Settings) -> LoginResponse:
    """Exchange a public identifier for a signed, time-limited credential."""
    if identifier is None or not identifier.strip():
        raise ValidationError("ID ist erforderlich!")

    logger.info("Login attempt for identifier %s", identifier)
    user = await authenticate_user(store, identifier)

    if not user:
        logger.info("Login rejected: unknown identifier %s", identifier)
        raise AuthenticationError("ID ungültig!")

    token_data = {
        "sub": str(user.id),
        "user_id": user.id,
        "role": user.role.value
    }
    access_token = create_access_token(token_data, settings)

    logger.info("Login succeeded for %s", user.name)
    return LoginResponse(
        token=access_token,
        name=user.name,
        user_id=user.id,
        role=user.role
    )

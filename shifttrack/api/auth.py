# Login endpoint
import logging
from fastapi import APIRouter, Depends, status
from typing import Optional

from shifttrack.api.deps import get_settings, get_store, require
from shifttrack.core.config import Settings
from shifttrack.core.errors import PersistenceError, ShiftTrackError
from shifttrack.db.store import ShiftStore
from shifttrack.models.schemas import LoginRequest, LoginResponse
from shifttrack.services import auth_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    login_data: Optional[LoginRequest] = None,
    settings: Settings = Depends(get_settings),
    store: ShiftStore = Depends(get_store),
    _: None = Depends(require("login")),
):
    """Login with the user's public identifier.

    Returns a JWT carrying user_id and role, valid for one hour.
    """
    identifier = login_data.id if login_data else None

    try:
        return await auth_service.login(store, identifier, settings)

    except ShiftTrackError:
        # Re-raise classified errors (400/401)
        raise
    except Exception as e:
        logger.error("Login failed: %s", e)
        raise PersistenceError("Fehler bei der Anmeldung!") from e

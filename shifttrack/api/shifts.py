# Shift submission and history endpoints
import logging
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List, Optional

from shifttrack.api.deps import get_active_schema, get_store, require
from shifttrack.core.errors import PersistenceError, ShiftTrackError
from shifttrack.db.store import ShiftStore
from shifttrack.models.schemas import Identity, MessageResponse
from shifttrack.models.shift import ShiftSchema
from shifttrack.services import shift_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add-shift", response_model=MessageResponse)
async def add_shift(
    payload: Dict[str, Any] = Body(...),
    schema: ShiftSchema = Depends(get_active_schema),
    store: ShiftStore = Depends(get_store),
    _: Optional[Identity] = Depends(require("add_shift")),
):
    """Record one shift. Every field of the active shift variant is required."""
    try:
        await shift_service.record_shift(store, schema, payload)
    except ShiftTrackError:
        raise
    except Exception as e:
        logger.error("Failed to add shift for user %s: %s", payload.get("user_id"), e)
        raise PersistenceError("Fehler beim Hinzufügen der Schicht!") from e

    return MessageResponse(message="Schicht erfolgreich hinzugefügt!")


@router.get("/shifts/{user_id}")
async def get_shifts(
    user_id: int,
    store: ShiftStore = Depends(get_store),
    _: Optional[Identity] = Depends(require("list_shifts")),
) -> List[Dict[str, Any]]:
    """All shifts of one user; an empty list when there are none."""
    try:
        return await shift_service.list_shifts(store, user_id)
    except ShiftTrackError:
        raise
    except Exception as e:
        logger.error("Failed to fetch shifts for user %s: %s", user_id, e)
        raise PersistenceError("Fehler beim Abrufen der Schichten!") from e

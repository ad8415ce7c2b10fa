# Monthly spreadsheet export endpoint
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from typing import Optional

from shifttrack.api.deps import get_active_schema, get_store, require
from shifttrack.core.errors import PersistenceError, ShiftTrackError
from shifttrack.db.store import ShiftStore
from shifttrack.models.schemas import Identity
from shifttrack.models.shift import ShiftSchema
from shifttrack.services.export_service import EXPORT_FILENAME, XLSX_MEDIA_TYPE, export_monthly

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/export", response_class=Response)
async def export(
    schema: ShiftSchema = Depends(get_active_schema),
    store: ShiftStore = Depends(get_store),
    caller: Optional[Identity] = Depends(require("export")),
):
    """
    Download the current month's shifts as an .xlsx attachment.

    Returns 404 when the month has no shifts yet.
    """
    try:
        content = await export_monthly(store, schema)
    except ShiftTrackError:
        raise
    except Exception as e:
        logger.error("Export failed: %s", e)
        raise PersistenceError("Fehler beim Export!") from e

    logger.info("Export downloaded by user %s", caller.user_id if caller else "anonymous")
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )

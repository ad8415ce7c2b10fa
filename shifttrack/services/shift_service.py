# Shift submission and history
import logging
from typing import Any, Mapping

from shifttrack.core.errors import ValidationError
from shifttrack.db.store import ShiftStore
from shifttrack.models.shift import ShiftSchema

logger = logging.getLogger(__name__)


async def record_shift(store: ShiftStore, schema: ShiftSchema, payload: Mapping[str, Any]) -> None:
    """
    Persist one shift row for ``payload["user_id"]``.

    Only presence is checked; types and ranges are left to the store. Identical
    resubmissions create additional rows.
    """
    missing = schema.missing_fields(payload)
    if missing:
        logger.info("Shift rejected, missing fields: %s", ", ".join(missing))
        raise ValidationError("Alle Felder sind erforderlich!", detail={"missing_fields": missing})

    values = schema.insert_values(payload)
    logger.info("Adding %s shift for user %s", schema.variant.value, values["user_id"])
    await store.insert_shift(schema, values)


async def list_shifts(store: ShiftStore, user_id: int) -> list[dict[str, Any]]:
    rows = await store.list_shifts(user_id)
    logger.info("%d shifts found for user %s", len(rows), user_id)
    return rows

"""
Shift record shapes.

Deployments store shifts either as a full itinerary (shift number, client,
vehicle, date, start and end time) or as a single total-hours figure. The
active variant is selected by configuration and drives validation, the insert
column list, and the export layout.
"""
from __future__ import annotations

import enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel


class ShiftVariant(str, enum.Enum):
    ITINERARY = "itinerary"
    TOTAL_HOURS = "total_hours"


class ShiftSchema(BaseModel):
    """Column set of one shift variant."""

    variant: ShiftVariant
    required_fields: tuple[str, ...]
    date_field: Optional[str] = None
    export_fields: tuple[str, ...]
    export_headers: tuple[str, ...]

    def missing_fields(self, payload: Mapping[str, Any]) -> list[str]:
        """Return the required fields that are absent, null or blank in ``payload``."""
        missing = []
        for name in self.required_fields:
            value = payload.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)
        return missing

    def insert_values(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        # Only declared columns are ever written
        return {name: payload[name] for name in self.required_fields}


SHIFT_SCHEMAS: dict[ShiftVariant, ShiftSchema] = {
    ShiftVariant.ITINERARY: ShiftSchema(
        variant=ShiftVariant.ITINERARY,
        required_fields=("user_id", "shift_number", "kunde", "auto", "datum", "start_time", "end_time"),
        date_field="datum",
        export_fields=("name", "unique_id", "shift_number", "kunde", "auto", "datum", "start_time", "end_time"),
        export_headers=("Name", "ID", "Schichtnummer", "Kunde", "Auto", "Datum", "Startzeit", "Endzeit"),
    ),
    ShiftVariant.TOTAL_HOURS: ShiftSchema(
        variant=ShiftVariant.TOTAL_HOURS,
        required_fields=("user_id", "total_hours"),
        export_fields=("name", "unique_id", "total_hours"),
        export_headers=("Name", "ID", "Gesamtstunden"),
    ),
}


def get_shift_schema(variant: ShiftVariant) -> ShiftSchema:
    return SHIFT_SCHEMAS[ShiftVariant(variant)]

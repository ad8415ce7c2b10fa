import asyncio
import io
from datetime import date, timedelta

import pytest
from openpyxl import load_workbook

from shifttrack.core.errors import NotFoundError
from shifttrack.models.shift import ShiftVariant, get_shift_schema
from shifttrack.services.export_service import XLSX_MEDIA_TYPE, export_monthly, month_bounds

TODAY = date.today()
FIRST_OF_MONTH = TODAY.replace(day=1)
LAST_MONTH = FIRST_OF_MONTH - timedelta(days=1)

ITINERARY_HEADERS = ["Name", "ID", "Schichtnummer", "Kunde", "Auto", "Datum", "Startzeit", "Endzeit"]


def _shift(user_id, number, day):
    return {
        "user_id": user_id,
        "shift_number": number,
        "kunde": "K",
        "auto": "V1",
        "datum": day.isoformat(),
        "start_time": "08:00",
        "end_time": "16:00",
    }


def _rows(content):
    wb = load_workbook(io.BytesIO(content))
    return [list(r) for r in wb.active.iter_rows(values_only=True)]


def _seed(client, token_for, shifts):
    for shift in shifts:
        headers = {"Authorization": f"Bearer {token_for(shift['user_id'])}"}
        assert client.post("/add-shift", json=shift, headers=headers).status_code == 200


def test_month_bounds():
    assert month_bounds(date(2024, 2, 29)) == (date(2024, 2, 1), date(2024, 3, 1))
    assert month_bounds(date(2023, 12, 31)) == (date(2023, 12, 1), date(2024, 1, 1))
    assert month_bounds(date(2024, 1, 1)) == (date(2024, 1, 1), date(2024, 2, 1))


def test_export_empty_month_returns_404(client, admin_headers):
    resp = client.get("/export", headers=admin_headers)
    assert resp.status_code == 404


def test_export_ignores_other_months(client, token_for, admin_headers):
    _seed(client, token_for, [_shift(1, "OLD", LAST_MONTH)])
    resp = client.get("/export", headers=admin_headers)
    assert resp.status_code == 404


def test_export_workbook(client, token_for, admin_headers):
    _seed(client, token_for, [
        _shift(1, "A1", FIRST_OF_MONTH),
        _shift(2, "B1", TODAY),
        _shift(1, "OLD", LAST_MONTH),
    ])

    resp = client.get("/export", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.headers["content-type"] == XLSX_MEDIA_TYPE
    assert resp.headers["content-disposition"] == 'attachment; filename="schichten_export.xlsx"'

    rows = _rows(resp.content)
    assert rows[0] == ITINERARY_HEADERS
    body = rows[1:]
    assert len(body) == 2
    assert {r[2] for r in body} == {"A1", "B1"}
    dates = [r[5] for r in body]
    assert dates == sorted(dates, reverse=True)


def test_export_row_matches_recorded_shift(client, token_for, admin_headers):
    shift = _shift(1, "A1", TODAY)
    _seed(client, token_for, [shift])

    rows = _rows(client.get("/export", headers=admin_headers).content)
    assert rows[1] == ["Anna Fahrer", "D-100", "A1", "K", "V1", TODAY.isoformat(), "08:00", "16:00"]


def test_export_forbidden_for_driver(client, driver_headers):
    assert client.get("/export", headers=driver_headers).status_code == 403


def test_export_requires_credential(client):
    assert client.get("/export").status_code == 401


def test_export_public_policy(make_client, token_for):
    client = make_client(ROUTE_POLICY={"export": "public"})
    _seed(client, token_for, [_shift(1, "A1", TODAY)])
    assert client.get("/export").status_code == 200


def test_export_store_failure(client, store, admin_headers):
    store.fail_with = RuntimeError("connection reset")
    resp = client.get("/export", headers=admin_headers)
    assert resp.status_code == 500
    assert resp.json()["message"] == "Fehler beim Export!"


def test_export_total_hours_variant(make_client, token_for, admin_headers):
    client = make_client(SHIFT_VARIANT="total_hours")
    for user_id, hours in [(1, 8), (2, 6.5)]:
        headers = {"Authorization": f"Bearer {token_for(user_id)}"}
        client.post("/add-shift", json={"user_id": user_id, "total_hours": hours}, headers=headers)

    rows = _rows(client.get("/export", headers=admin_headers).content)
    assert rows == [
        ["Name", "ID", "Gesamtstunden"],
        ["Bernd Kurier", "D-200", 6.5],
        ["Anna Fahrer", "D-100", 8],
    ]


def test_export_monthly_uses_given_day(store):
    schema = get_shift_schema(ShiftVariant.ITINERARY)
    store.shifts.append(dict(_shift(1, "X", date(2024, 5, 20)), id=1))

    content = asyncio.run(export_monthly(store, schema, today=date(2024, 5, 2)))
    assert len(_rows(content)) == 2

    with pytest.raises(NotFoundError):
        asyncio.run(export_monthly(store, schema, today=date(2024, 6, 2)))

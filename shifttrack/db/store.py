"""
Relational store access for users and shifts.

Assumptions:
- Tables already exist:
  users(id, unique_id, name, role)
  shifts(id, user_id, <variant columns>) with user_id referencing users(id).
- The connection pool is owned by the application and handed in; this module
  never creates connections on its own.
"""
from __future__ import annotations

import abc
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from shifttrack.models.shift import ShiftSchema

logger = logging.getLogger(__name__)


class ShiftStore(abc.ABC):
    """Operations the request handlers need from the store."""

    @abc.abstractmethod
    async def find_user_by_unique_id(self, unique_id: str) -> Optional[dict[str, Any]]:
        ...

    @abc.abstractmethod
    async def insert_shift(self, schema: ShiftSchema, values: Mapping[str, Any]) -> None:
        ...

    @abc.abstractmethod
    async def list_shifts(self, user_id: int) -> list[dict[str, Any]]:
        ...

    @abc.abstractmethod
    async def monthly_rows(self, schema: ShiftSchema, start: date, end: date) -> list[dict[str, Any]]:
        """Shifts joined with their user, date in ``[start, end)``, newest first."""


class PostgresShiftStore(ShiftStore):
    def __init__(self, pool: AsyncConnectionPool):
        self._pool = pool

    async def _fetch_all(self, query, params=None) -> list[dict[str, Any]]:
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(query, params)
                return await cur.fetchall()

    async def find_user_by_unique_id(self, unique_id: str) -> Optional[dict[str, Any]]:
        rows = await self._fetch_all(
            "SELECT id, unique_id, name, role FROM users WHERE unique_id = %s",
            (unique_id,),
        )
        return rows[0] if rows else None

    async def insert_shift(self, schema: ShiftSchema, values: Mapping[str, Any]) -> None:
        columns = list(values)
        query = sql.SQL("INSERT INTO shifts ({}) VALUES ({})").format(
            sql.SQL(", ").join(map(sql.Identifier, columns)),
            sql.SQL(", ").join(sql.Placeholder(name) for name in columns),
        )
        # The pool commits on a clean exit from the connection block
        async with self._pool.connection() as conn:
            await conn.execute(query, dict(values))
        logger.debug("Inserted %s shift for user %s", schema.variant.value, values.get("user_id"))

    async def list_shifts(self, user_id: int) -> list[dict[str, Any]]:
        rows = await self._fetch_all(
            "SELECT * FROM shifts WHERE user_id = %s ORDER BY id",
            (user_id,),
        )
        # NUMERIC columns (total_hours) arrive as Decimal; clients expect JSON numbers
        return [
            {k: float(v) if isinstance(v, Decimal) else v for k, v in row.items()}
            for row in rows
        ]

    async def monthly_rows(self, schema: ShiftSchema, start: date, end: date) -> list[dict[str, Any]]:
        shift_columns = [f for f in schema.export_fields if f not in ("name", "unique_id")]
        select = sql.SQL(", ").join(
            [sql.Identifier("u", "name"), sql.Identifier("u", "unique_id")]
            + [sql.Identifier("s", f) for f in shift_columns]
        )
        base = sql.SQL("SELECT {} FROM shifts s JOIN users u ON u.id = s.user_id").format(select)

        if schema.date_field is None:
            # No date column to window on: every row, newest insert first
            return await self._fetch_all(base + sql.SQL(" ORDER BY s.id DESC"))

        date_col = sql.Identifier("s", schema.date_field)
        query = base + sql.SQL(" WHERE {col} >= %s AND {col} < %s ORDER BY {col} DESC").format(col=date_col)
        return await self._fetch_all(query, (start, end))

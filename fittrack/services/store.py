"""Supabase store client with RLS context.

Every store call runs in a transaction on a pooled connection where the
Supabase JWT claims are set via ``set_config('request.jwt.claims', ..., true)``
and the role is switched with ``SET LOCAL ROLE``.  Postgres Row-Level
Security policies (``auth.uid() = user_id``) therefore see the caller's
identity, and ownership is enforced by the database rather than by the
application.

The client exposes the small PostgREST-shaped vocabulary the views need:
select with equality filters / order / limit, insert, update-by-filter and
delete-by-filter.  ``Store.session()`` groups several of those into a single
transaction.

A ``Store`` instance is created once at app startup and handed to views
through the ``get_store`` dependency, so tests can substitute a fake.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Iterable, Mapping

import asyncpg

from fittrack.config import Settings, get_settings

logger = logging.getLogger("fittrack.store")

TABLES: frozenset[str] = frozenset(
    {"profiles", "exercises", "workouts", "workout_exercises", "user_goals"}
)

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")

Row = dict[str, Any]
Filters = Mapping[str, Any]

# Server errors, client/pool misuse (closed pool, lost connection) and socket failures
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


class StoreError(Exception):
    """Raised when a store request fails (network, policy denial, constraint).

    ``code`` carries the Postgres SQLSTATE when the server reported one.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


def _ident(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid identifier: {name!r}")
    return f'"{name}"'


def _table(name: str) -> str:
    if name not in TABLES:
        raise ValueError(f"Unknown table: {name!r}")
    return _ident(name)


def _columns(columns: Iterable[str] | str) -> str:
    if columns == "*":
        return "*"
    if isinstance(columns, str):
        columns = [c.strip() for c in columns.split(",")]
    return ", ".join(_ident(c) for c in columns)


def _where(filters: Filters | None, params: list[Any]) -> str:
    """Build a WHERE clause, appending bound values to ``params``.

    ``None`` matches ``IS NULL``; lists, tuples and sets match membership.
    """
    if not filters:
        return ""
    clauses = []
    for column, value in filters.items():
        col = _ident(column)
        if value is None:
            clauses.append(f"{col} IS NULL")
        elif isinstance(value, (list, tuple, set, frozenset)):
            params.append(list(value))
            clauses.append(f"{col} = ANY(${len(params)})")
        else:
            params.append(value)
            clauses.append(f"{col} = ${len(params)}")
    return " WHERE " + " AND ".join(clauses)


def _wrap(exc: Exception) -> StoreError:
    code = getattr(exc, "sqlstate", None)
    return StoreError(str(exc) or exc.__class__.__name__, code=code)


class StoreSession:
    """Store operations bound to one connection and one transaction."""

    def __init__(self, conn: asyncpg.Connection) -> None:
        self._conn = conn

    async def select(
        self,
        table: str,
        *,
        columns: Iterable[str] | str = "*",
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        params: list[Any] = []
        query = f"SELECT {_columns(columns)} FROM {_table(table)}"
        query += _where(filters, params)
        if order_by:
            query += f" ORDER BY {_ident(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            params.append(limit)
            query += f" LIMIT ${len(params)}"
        try:
            rows = await self._conn.fetch(query, *params)
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc
        return [dict(r) for r in rows]

    async def select_one(
        self,
        table: str,
        *,
        columns: Iterable[str] | str = "*",
        filters: Filters | None = None,
    ) -> Row | None:
        rows = await self.select(table, columns=columns, filters=filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, values: Row | list[Row]) -> list[Row]:
        """Insert one or many rows and return them as stored."""
        rows = [values] if isinstance(values, Mapping) else list(values)
        inserted: list[Row] = []
        for row in rows:
            names = list(row.keys())
            placeholders = ", ".join(f"${i}" for i in range(1, len(names) + 1))
            query = (
                f"INSERT INTO {_table(table)} ({_columns(names)}) "
                f"VALUES ({placeholders}) RETURNING *"
            )
            try:
                record = await self._conn.fetchrow(query, *row.values())
            except _DRIVER_ERRORS as exc:
                raise _wrap(exc) from exc
            inserted.append(dict(record))
        return inserted

    async def update(self, table: str, values: Row, *, filters: Filters) -> list[Row]:
        """Update rows matching ``filters`` and return them."""
        if not filters:
            raise ValueError("update requires at least one filter")
        params: list[Any] = []
        set_clauses = []
        for column, value in values.items():
            params.append(value)
            set_clauses.append(f"{_ident(column)} = ${len(params)}")
        query = f"UPDATE {_table(table)} SET {', '.join(set_clauses)}"
        query += _where(filters, params) + " RETURNING *"
        try:
            rows = await self._conn.fetch(query, *params)
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc
        return [dict(r) for r in rows]

    async def delete(self, table: str, *, filters: Filters) -> int:
        """Delete rows matching ``filters`` and return how many were removed."""
        if not filters:
            raise ValueError("delete requires at least one filter")
        params: list[Any] = []
        query = f"DELETE FROM {_table(table)}" + _where(filters, params)
        try:
            status = await self._conn.execute(query, *params)
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc
        # asyncpg returns the command tag, e.g. "DELETE 3"
        return int(status.rsplit(" ", 1)[-1])


class Store:
    """Pool-backed store client.  Call ``open()`` once at startup."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._pool: asyncpg.Pool | None = None

    async def open(self) -> None:
        s = self._settings
        try:
            self._pool = await asyncpg.create_pool(
                s.supabase_db_url,
                min_size=s.store_pool_min_size,
                max_size=s.store_pool_max_size,
                command_timeout=s.store_command_timeout,
            )
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc
        logger.info(
            "Store pool initialized (min=%d, max=%d)",
            s.store_pool_min_size,
            s.store_pool_max_size,
        )

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Store pool closed")

    def _get_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("Store pool not initialized; call open() first")
        return self._pool

    @asynccontextmanager
    async def session(
        self, user_id: uuid.UUID | None = None
    ) -> AsyncGenerator[StoreSession, None]:
        """Acquire a connection and open a transaction with RLS claims set.

        Usage::

            async with store.session(user_id=identity.id) as s:
                await s.delete("workout_exercises", filters={"workout_id": wid})
                await s.insert("workout_exercises", rows)

        Without ``user_id`` no claims are set (service access, used for
        provisioning only).  Any exception rolls the transaction back.
        """
        pool = self._get_pool()
        try:
            async with pool.acquire() as conn:
                async with conn.transaction():
                    if user_id:
                        claims = json.dumps(
                            {"sub": str(user_id), "role": self._settings.store_role}
                        )
                        await conn.execute(
                            "SELECT set_config('request.jwt.claims', $1, true)", claims
                        )
                        await conn.execute(
                            f"SET LOCAL ROLE {_ident(self._settings.store_role)}"
                        )
                    yield StoreSession(conn)
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc

    async def ping(self) -> bool:
        """Round-trip ``SELECT 1``.  Raises ``StoreError`` when unreachable."""
        pool = self._get_pool()
        try:
            async with pool.acquire() as conn:
                return await conn.fetchval("SELECT 1") == 1
        except _DRIVER_ERRORS as exc:
            raise _wrap(exc) from exc

    # ---------- Single-statement shortcuts ----------

    async def select(
        self, table: str, *, user_id: uuid.UUID | None, **kwargs: Any
    ) -> list[Row]:
        async with self.session(user_id) as s:
            return await s.select(table, **kwargs)

    async def select_one(
        self, table: str, *, user_id: uuid.UUID | None, **kwargs: Any
    ) -> Row | None:
        async with self.session(user_id) as s:
            return await s.select_one(table, **kwargs)

    async def insert(
        self, table: str, values: Row | list[Row], *, user_id: uuid.UUID | None
    ) -> list[Row]:
        async with self.session(user_id) as s:
            return await s.insert(table, values)

    async def update(
        self, table: str, values: Row, *, filters: Filters, user_id: uuid.UUID | None
    ) -> list[Row]:
        async with self.session(user_id) as s:
            return await s.update(table, values, filters=filters)

    async def delete(
        self, table: str, *, filters: Filters, user_id: uuid.UUID | None
    ) -> int:
        async with self.session(user_id) as s:
            return await s.delete(table, filters=filters)

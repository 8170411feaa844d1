"""Dialect-aware INSERT ... ON CONFLICT construction.

PostgreSQL and SQLite both support ``on_conflict_do_nothing`` /
``on_conflict_do_update`` but through dialect-specific ``insert`` constructs.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def upsert_insert(db: AsyncSession, model: Any) -> Any:  # noqa: ANN401
    """Return an insert construct for ``model`` that supports ON CONFLICT clauses."""
    dialect = db.bind.dialect.name if db.bind is not None else "postgresql"
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    msg = f"ON CONFLICT inserts are not supported on {dialect}"
    raise RuntimeError(msg)

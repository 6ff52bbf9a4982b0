"""Generic row-level data access over the application tables.

Services talk to the store through :class:`Repository` instead of building
statements themselves. Relations are addressed by table name and filtered with
a small set of combinators:

- ``eq``: column equals value (``None`` matches ``IS NULL``)
- ``not_eq``: column differs from value (``None`` matches ``IS NOT NULL``)
- ``in_``: column is one of the given values
- ``gte`` / ``lte``: inclusive range bounds
- ``ilike``: column contains the given text, ignoring case

``order_by`` takes column names, prefixed with ``-`` for descending order.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog
from sqlalchemy import Table, and_, delete, insert, select, true, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import PersistenceException
from app.models import metadata

logger = structlog.get_logger()

Filter = Mapping[str, Any]


class Repository:
    """Row-level CRUD against named relations."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session."""
        self.db = db

    @staticmethod
    def _table(relation: str) -> Table:
        try:
            return metadata.tables[relation]
        except KeyError:
            raise ValueError(f"Unknown relation: {relation}") from None

    @staticmethod
    def _conditions(
        table: Table,
        eq: Filter | None = None,
        not_eq: Filter | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        gte: Filter | None = None,
        lte: Filter | None = None,
        ilike: Mapping[str, str] | None = None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []

        for name, value in (eq or {}).items():
            column = table.c[name]
            conditions.append(column.is_(None) if value is None else column == value)

        for name, value in (not_eq or {}).items():
            column = table.c[name]
            conditions.append(column.isnot(None) if value is None else column != value)

        for name, values in (in_ or {}).items():
            conditions.append(table.c[name].in_(list(values)))

        for name, value in (gte or {}).items():
            conditions.append(table.c[name] >= value)

        for name, value in (lte or {}).items():
            conditions.append(table.c[name] <= value)

        for name, value in (ilike or {}).items():
            pattern = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            conditions.append(table.c[name].ilike(f"%{pattern}%", escape="\\"))

        return conditions

    @staticmethod
    def _ordering(table: Table, order_by: Sequence[str] | None) -> list[Any]:
        ordering = []
        for name in order_by or []:
            if name.startswith("-"):
                ordering.append(table.c[name[1:]].desc())
            else:
                ordering.append(table.c[name].asc())
        return ordering

    async def _execute(self, relation: str, operation: str, stmt: Any) -> Any:
        try:
            return await self.db.execute(stmt)
        except IntegrityError as e:
            detail = str(e.orig) if hasattr(e, "orig") else str(e)
            logger.warning(
                "repository_integrity_error",
                relation=relation,
                operation=operation,
                error=detail,
            )
            await self.db.rollback()
            raise PersistenceException(
                f"Failed to {operation} {relation}: constraint violated", detail=detail
            ) from e
        except SQLAlchemyError as e:
            logger.error(
                "repository_error",
                relation=relation,
                operation=operation,
                error=str(e),
            )
            await self.db.rollback()
            raise PersistenceException(f"Failed to {operation} {relation}", detail=str(e)) from e

    async def select(
        self,
        relation: str,
        *,
        eq: Filter | None = None,
        not_eq: Filter | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        gte: Filter | None = None,
        lte: Filter | None = None,
        ilike: Mapping[str, str] | None = None,
        order_by: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict]:
        """Select rows matching all filters."""
        table = self._table(relation)
        stmt = select(table).where(
            and_(true(), *self._conditions(table, eq, not_eq, in_, gte, lte, ilike))
        )
        ordering = self._ordering(table, order_by)
        if ordering:
            stmt = stmt.order_by(*ordering)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)

        result = await self._execute(relation, "select", stmt)
        return [dict(row) for row in result.mappings().all()]

    async def select_one(self, relation: str, **filters: Any) -> dict | None:
        """Select the first row matching all filters, if any."""
        rows = await self.select(relation, limit=1, **filters)
        return rows[0] if rows else None

    async def insert(
        self,
        relation: str,
        values: Mapping[str, Any],
        *,
        commit: bool = True,
    ) -> dict:
        """Insert one row and return it as stored."""
        table = self._table(relation)
        stmt = insert(table).values(**values).returning(table)

        result = await self._execute(relation, "insert", stmt)
        row = result.mappings().first()
        if commit:
            await self.commit()
        return dict(row)

    async def update(
        self,
        relation: str,
        values: Mapping[str, Any],
        *,
        eq: Filter | None = None,
        not_eq: Filter | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        commit: bool = True,
    ) -> list[dict]:
        """Update every row matching the filters and return the updated rows."""
        table = self._table(relation)
        conditions = self._conditions(table, eq, not_eq, in_)
        if not conditions:
            raise ValueError("Refusing to update without filters")

        stmt = update(table).where(and_(*conditions)).values(**values).returning(table)

        result = await self._execute(relation, "update", stmt)
        rows = [dict(row) for row in result.mappings().all()]
        if commit:
            await self.commit()
        return rows

    async def delete(
        self,
        relation: str,
        *,
        eq: Filter | None = None,
        not_eq: Filter | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        commit: bool = True,
    ) -> int:
        """Delete every row matching the filters and return how many were removed."""
        table = self._table(relation)
        conditions = self._conditions(table, eq, not_eq, in_)
        if not conditions:
            raise ValueError("Refusing to delete without filters")

        stmt = delete(table).where(and_(*conditions))

        result = await self._execute(relation, "delete", stmt)
        if commit:
            await self.commit()
        return result.rowcount or 0

    async def commit(self) -> None:
        """Commit pending writes."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            detail = str(e.orig) if hasattr(e, "orig") else str(e)
            raise PersistenceException("Failed to commit transaction", detail=detail) from e

    async def rollback(self) -> None:
        """Discard pending writes."""
        await self.db.rollback()

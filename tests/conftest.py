"""Shared test fixtures.

Tests run against an in-memory stand-in for :class:`app.core.repository.Repository`
so the API can be exercised without PostgreSQL or Redis. The stand-in mirrors
the repository's filter semantics, transaction boundaries and the unique and
overlap constraints services translate into conflicts.
"""

import copy
from collections.abc import AsyncGenerator, Awaitable, Callable, Iterable, Mapping, Sequence
from datetime import UTC, date, datetime, time
from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.exceptions import PersistenceException
from app.core.redis_client import CacheManager
from app.dependencies import get_cache_manager, get_repository
from app.main import app
from app.models import metadata
from app.models.appointments import APPOINTMENT_OVERLAP_CONSTRAINT

# Column defaults the database fills in
SERVER_DEFAULTS: dict[str, dict[str, Any]] = {
    "units": {"status": True},
    "doctors": {"status": True},
    "procedures": {"status": True, "exam_requirements": []},
    "availabilities": {"is_procedure_day": False},
    "appointments": {"is_procedure": False, "status": "scheduled"},
}

# (constraint name, columns, whether NULL participates in the comparison)
UNIQUE_CONSTRAINTS: dict[str, list[tuple[str, tuple[str, ...], bool]]] = {
    "units": [("units_cnpj_key", ("cnpj",), False)],
    "doctors": [("doctors_professional_id_key", ("professional_id",), False)],
    "patients": [("patients_cpf_key", ("cpf",), False)],
    "availabilities": [
        (
            "uq_availabilities_per_date",
            ("unit_id", "availability_date", "procedure_id"),
            True,
        ),
    ],
}


class InMemoryRepository:
    """Dictionary-backed repository with commit and rollback."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {name: [] for name in metadata.tables}
        self._committed = copy.deepcopy(self.tables)
        self.commits = 0
        self.rollbacks = 0
        # Predicate (relation, values) deciding whether an insert fails
        self.fail_insert: Callable[[str, Mapping[str, Any]], bool] | None = None
        # Runs once before the next insert or update, standing in for a concurrent writer
        self.before_write: Callable[[], Awaitable[None]] | None = None

    def _rows(self, relation: str) -> list[dict]:
        if relation not in self.tables:
            raise ValueError(f"Unknown relation: {relation}")
        return self.tables[relation]

    @staticmethod
    def _matches(
        row: Mapping[str, Any],
        eq: Mapping[str, Any] | None = None,
        not_eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        gte: Mapping[str, Any] | None = None,
        lte: Mapping[str, Any] | None = None,
        ilike: Mapping[str, str] | None = None,
    ) -> bool:
        for name, value in (eq or {}).items():
            if row[name] != value:
                return False
        for name, value in (not_eq or {}).items():
            if value is None:
                if row[name] is None:
                    return False
            elif row[name] is None or row[name] == value:
                return False
        for name, values in (in_ or {}).items():
            if row[name] not in list(values):
                return False
        for name, value in (gte or {}).items():
            if row[name] is None or row[name] < value:
                return False
        for name, value in (lte or {}).items():
            if row[name] is None or row[name] > value:
                return False
        for name, value in (ilike or {}).items():
            if row[name] is None or value.casefold() not in row[name].casefold():
                return False
        return True

    def _check_unique(self, relation: str, candidate: dict) -> None:
        for name, columns, nulls_equal in UNIQUE_CONSTRAINTS.get(relation, []):
            key = tuple(candidate[c] for c in columns)
            if not nulls_equal and None in key:
                continue
            for row in self.tables[relation]:
                if row["id"] != candidate["id"] and tuple(row[c] for c in columns) == key:
                    self.tables = copy.deepcopy(self._committed)
                    raise PersistenceException(
                        f"Failed to write {relation}: constraint violated",
                        detail=f'duplicate key value violates unique constraint "{name}"',
                    )

        if relation == "appointments":
            self._check_overlap(candidate)

    def _check_overlap(self, candidate: dict) -> None:
        for row in self.tables["appointments"]:
            if (
                row["id"] != candidate["id"]
                and row["unit_id"] == candidate["unit_id"]
                and row["appointment_date"] == candidate["appointment_date"]
                and row["start_time"] < candidate["end_time"]
                and candidate["start_time"] < row["end_time"]
            ):
                self.tables = copy.deepcopy(self._committed)
                raise PersistenceException(
                    "Failed to write appointments: constraint violated",
                    detail=(
                        "conflicting key value violates exclusion constraint "
                        f'"{APPOINTMENT_OVERLAP_CONSTRAINT}"'
                    ),
                )

    async def _run_before_write(self) -> None:
        hook, self.before_write = self.before_write, None
        if hook:
            await hook()

    async def select(
        self,
        relation: str,
        *,
        eq: Mapping[str, Any] | None = None,
        not_eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        gte: Mapping[str, Any] | None = None,
        lte: Mapping[str, Any] | None = None,
        ilike: Mapping[str, str] | None = None,
        order_by: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict]:
        rows = [
            dict(row)
            for row in self._rows(relation)
            if self._matches(row, eq, not_eq, in_, gte, lte, ilike)
        ]
        for name in reversed(order_by or []):
            descending = name.startswith("-")
            rows.sort(key=lambda r, n=name.lstrip("-"): r[n], reverse=descending)
        if offset:
            rows = rows[offset:]
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def select_one(self, relation: str, **filters: Any) -> dict | None:
        rows = await self.select(relation, limit=1, **filters)
        return rows[0] if rows else None

    async def insert(
        self,
        relation: str,
        values: Mapping[str, Any],
        *,
        commit: bool = True,
    ) -> dict:
        await self._run_before_write()
        rows = self._rows(relation)
        if self.fail_insert and self.fail_insert(relation, values):
            self.tables = copy.deepcopy(self._committed)
            raise PersistenceException(f"Failed to insert {relation}", detail="simulated failure")

        now = datetime.now(UTC)
        row = {column.name: None for column in metadata.tables[relation].c}
        row.update(copy.deepcopy(SERVER_DEFAULTS.get(relation, {})))
        row["id"] = uuid4()
        if "created_at" in row:
            row["created_at"] = now
        if "updated_at" in row:
            row["updated_at"] = now
        row.update(values)

        self._check_unique(relation, row)
        rows.append(row)
        if commit:
            await self.commit()
        return dict(row)

    async def update(
        self,
        relation: str,
        values: Mapping[str, Any],
        *,
        eq: Mapping[str, Any] | None = None,
        not_eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        commit: bool = True,
    ) -> list[dict]:
        if not (eq or not_eq or in_):
            raise ValueError("Refusing to update without filters")
        await self._run_before_write()

        updated = []
        for row in self._rows(relation):
            if self._matches(row, eq, not_eq, in_):
                row.update(values)
                self._check_unique(relation, row)
                updated.append(dict(row))
        if commit:
            await self.commit()
        return updated

    async def delete(
        self,
        relation: str,
        *,
        eq: Mapping[str, Any] | None = None,
        not_eq: Mapping[str, Any] | None = None,
        in_: Mapping[str, Iterable[Any]] | None = None,
        commit: bool = True,
    ) -> int:
        if not (eq or not_eq or in_):
            raise ValueError("Refusing to delete without filters")

        rows = self._rows(relation)
        kept = [row for row in rows if not self._matches(row, eq, not_eq, in_)]
        removed = len(rows) - len(kept)
        self.tables[relation] = kept
        if commit:
            await self.commit()
        return removed

    async def commit(self) -> None:
        self._committed = copy.deepcopy(self.tables)
        self.commits += 1

    async def rollback(self) -> None:
        self.tables = copy.deepcopy(self._committed)
        self.rollbacks += 1


@pytest.fixture
def repo() -> InMemoryRepository:
    """Create an empty in-memory repository."""
    return InMemoryRepository()


@pytest.fixture
def mock_redis() -> MagicMock:
    """Redis client double that always misses."""
    client = MagicMock()
    client.get.return_value = None
    client.keys.return_value = []
    return client


@pytest.fixture
def cache_manager(mock_redis: MagicMock) -> CacheManager:
    """Cache manager over the Redis double."""
    return CacheManager(redis_client=mock_redis)


@pytest_asyncio.fixture
async def client(
    repo: InMemoryRepository,
    cache_manager: CacheManager,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_cache_manager] = lambda: cache_manager

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unit(repo: InMemoryRepository) -> dict:
    """Create a test unit."""
    return await repo.insert(
        "units",
        {"name": "Unidade Centro", "address": "Rua das Flores, 100", "city": "Curitiba"},
    )


@pytest_asyncio.fixture
async def other_unit(repo: InMemoryRepository) -> dict:
    """Create a second test unit."""
    return await repo.insert(
        "units",
        {"name": "Unidade Batel", "address": "Av. Batel, 2000", "city": "Curitiba"},
    )


@pytest_asyncio.fixture
async def doctor(repo: InMemoryRepository, unit: dict) -> dict:
    """Create a test doctor attending the test unit."""
    return await repo.insert(
        "doctors",
        {
            "name": "Dra. Helena Prado",
            "specialty": "Ginecologia",
            "professional_id": "CRM-PR 12345",
            "default_unit_id": unit["id"],
        },
    )


@pytest_asyncio.fixture
async def patient(repo: InMemoryRepository) -> dict:
    """Create a test patient born in 2000."""
    return await repo.insert(
        "patients",
        {
            "name": "Maria Souza",
            "cpf": "12345678909",
            "birth_date": date(2000, 3, 15),
            "gender": "female",
            "phone": "41999990000",
        },
    )


@pytest_asyncio.fixture
async def procedure(repo: InMemoryRepository) -> dict:
    """Create a procedure with gender, age and condition guarded exam rules."""
    return await repo.insert(
        "procedures",
        {
            "name": "Laqueadura",
            "duration_minutes": 60,
            "exam_requirements": [
                {
                    "id": str(uuid4()),
                    "gender": "all",
                    "age_min": 18,
                    "age_max": None,
                    "conditions": [],
                    "exams": ["Hemograma completo"],
                },
                {
                    "id": str(uuid4()),
                    "gender": "female",
                    "age_min": None,
                    "age_max": None,
                    "conditions": ["sexual_activity"],
                    "exams": ["Beta HCG", "Hemograma completo"],
                },
            ],
        },
    )


@pytest_asyncio.fixture
async def second_procedure(repo: InMemoryRepository) -> dict:
    """Create a procedure without exam rules."""
    return await repo.insert("procedures", {"name": "Inserção de DIU", "duration_minutes": 30})


@pytest.fixture
def appointment_payload(unit: dict, doctor: dict, patient: dict) -> Callable[..., dict]:
    """Build appointment request bodies for the test unit."""

    def build(
        start: time = time(9, 0),
        end: time = time(9, 30),
        day: date = date(2025, 6, 10),
        **overrides: Any,
    ) -> dict:
        payload = {
            "patient_id": str(patient["id"]),
            "doctor_id": str(doctor["id"]),
            "unit_id": str(unit["id"]),
            "appointment_date": day.isoformat(),
            "start_time": start.strftime("%H:%M"),
            "end_time": end.strftime("%H:%M"),
        }
        payload.update(overrides)
        return payload

    return build

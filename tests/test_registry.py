"""Tests for unit, doctor, patient and procedure endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.dialects import postgresql

from app.core.repository import Repository
from app.models import metadata
from app.services.patient_service import PatientService


@pytest.mark.asyncio
async def test_unit_crud(client: AsyncClient) -> None:
    """Test creating, reading, updating and deleting a unit."""
    response = await client.post(
        "/api/v1/units/",
        json={
            "name": "Unidade Água Verde",
            "address": "Rua Brasílio Itiberê, 500",
            "zip_code": "80240-060",
            "cnpj": "12.345.678/0001-90",
        },
    )
    assert response.status_code == 201
    unit = response.json()
    assert unit["status"] is True

    response = await client.put(f"/api/v1/units/{unit['id']}", json={"status": False})
    assert response.status_code == 200
    assert response.json()["status"] is False
    assert response.json()["name"] == "Unidade Água Verde"

    response = await client.get("/api/v1/units/", params={"status": "false"})
    assert [u["id"] for u in response.json()] == [unit["id"]]

    response = await client.delete(f"/api/v1/units/{unit['id']}")
    assert response.status_code == 204

    response = await client.get(f"/api/v1/units/{unit['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_unit_cnpj(client: AsyncClient) -> None:
    """Test a repeated CNPJ is a conflict."""
    body = {"name": "Unidade A", "address": "Rua A, 1", "cnpj": "12.345.678/0001-90"}
    assert (await client.post("/api/v1/units/", json=body)).status_code == 201

    response = await client.post("/api/v1/units/", json={**body, "name": "Unidade B"})
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_doctor_endpoints(client: AsyncClient, unit: dict) -> None:
    """Test doctor registration and filtering by unit."""
    body = {
        "name": "Dr. Paulo Mendes",
        "specialty": "Urologia",
        "professional_id": "CRM-PR 54321",
        "default_unit_id": str(unit["id"]),
    }
    response = await client.post("/api/v1/doctors/", json=body)
    assert response.status_code == 201

    response = await client.post("/api/v1/doctors/", json=body)
    assert response.status_code == 409

    response = await client.get("/api/v1/doctors/", params={"unit_id": str(unit["id"])})
    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["Dr. Paulo Mendes"]


@pytest.mark.asyncio
async def test_patient_endpoints(client: AsyncClient) -> None:
    """Test patient registration, CPF normalization and lookup."""
    response = await client.post(
        "/api/v1/patients/",
        json={"name": "Ana Costa", "cpf": "529.982.247-25", "gender": "female"},
    )
    assert response.status_code == 201
    assert response.json()["cpf"] == "52998224725"

    response = await client.post(
        "/api/v1/patients/", json={"name": "Outra Ana", "cpf": "52998224725"}
    )
    assert response.status_code == 409

    response = await client.get("/api/v1/patients/by-cpf/529.982.247-25")
    assert response.status_code == 200
    assert response.json()["name"] == "Ana Costa"

    response = await client.get("/api/v1/patients/by-cpf/000")
    assert response.status_code == 404

    response = await client.get("/api/v1/patients/", params={"name_search": "costa"})
    assert len(response.json()) == 1


@pytest.mark.asyncio
async def test_patient_with_short_cpf_rejected(client: AsyncClient) -> None:
    """Test a CPF without 11 digits fails validation."""
    response = await client.post("/api/v1/patients/", json={"name": "Ana", "cpf": "123"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_procedure_exam_requirements(client: AsyncClient) -> None:
    """Test procedures store typed exam requirement rules."""
    response = await client.post(
        "/api/v1/procedures/",
        json={
            "name": "Vasectomia",
            "price_cash": "1500.00",
            "exam_requirements": [
                {"gender": "male", "age_min": 21, "exams": [" Espermograma "]},
            ],
        },
    )
    assert response.status_code == 201
    procedure = response.json()
    assert procedure["price_cash"] == 1500.0

    response = await client.get(f"/api/v1/procedures/{procedure['id']}/exam-requirements")
    assert response.status_code == 200
    rules = response.json()
    assert len(rules) == 1
    assert rules[0]["gender"] == "male"
    assert rules[0]["age_min"] == 21
    assert rules[0]["age_max"] is None
    assert rules[0]["exams"] == ["Espermograma"]


@pytest.mark.asyncio
async def test_procedure_rejects_unordered_age_bounds(client: AsyncClient) -> None:
    """Test a rule with age_min above age_max is rejected."""
    response = await client.post(
        "/api/v1/procedures/",
        json={
            "name": "Consulta",
            "exam_requirements": [{"age_min": 60, "age_max": 18, "exams": ["Hemograma"]}],
        },
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_patient_name_search_is_filtered_in_query() -> None:
    """Test the name search is sent to the store instead of filtered afterwards."""
    repo = AsyncMock()
    repo.select.return_value = []

    await PatientService(repo).list_patients(name_search="Costa")

    repo.select.assert_awaited_once_with("patients", ilike={"name": "Costa"}, order_by=["name"])


def test_ilike_condition_escapes_wildcards() -> None:
    """Test the ilike combinator renders a case-insensitive containment match."""
    (condition,) = Repository._conditions(metadata.tables["patients"], ilike={"name": "50%"})
    compiled = condition.compile(dialect=postgresql.dialect())

    assert "ILIKE" in str(compiled).upper()
    assert "ESCAPE" in str(compiled).upper()
    assert list(compiled.params.values()) == ["%50\\%%"]

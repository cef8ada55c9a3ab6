"""Tests for department lookup and creation."""

import pytest

from heyteam.domain.departments.service import DepartmentService
from heyteam.errors import UpdateError, ValidationError


@pytest.mark.asyncio
async def test_list_departments(client):
    departments = await DepartmentService(client).list_departments()

    assert [d.name for d in departments] == ["Warehouse"]
    assert departments[0].address == "1 Dock Rd"


@pytest.mark.asyncio
async def test_create_department_trims_and_nulls_blanks(backend, client):
    department = await DepartmentService(client).create_department("  Kitchen ", description=" ", address=None)

    assert department.name == "Kitchen"
    assert backend.departments[-1] == {"id": "d2", "name": "Kitchen", "description": None, "address": None}


@pytest.mark.asyncio
async def test_create_department_requires_name(backend, client):
    with pytest.raises(ValidationError) as excinfo:
        await DepartmentService(client).create_department("   ")

    assert excinfo.value.message == "Department name is required"
    assert backend.calls("POST") == []


@pytest.mark.asyncio
async def test_create_department_rejected(backend, client):
    backend.reject_with = (409, {"message": "Department already exists"})

    with pytest.raises(UpdateError) as excinfo:
        await DepartmentService(client).create_department("Warehouse")

    assert excinfo.value.message == "Department already exists"


def test_find_department():
    assert DepartmentService.find([], "d1") is None


@pytest.mark.asyncio
async def test_update_department(backend, client):
    department = await DepartmentService(client).update_department("d1", " Depot ", address="2 Quay St")

    assert department.name == "Depot"
    assert backend.departments[0] == {"id": "d1", "name": "Depot", "description": None, "address": "2 Quay St"}


@pytest.mark.asyncio
async def test_update_department_validation_and_missing(backend, client):
    service = DepartmentService(client)

    with pytest.raises(ValidationError):
        await service.update_department("d1", "")
    assert backend.calls("PATCH") == []

    with pytest.raises(UpdateError) as excinfo:
        await service.update_department("d9", "Ghost")
    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_department(backend, client):
    service = DepartmentService(client)

    await service.delete_department("d1")

    assert backend.departments == []
    with pytest.raises(UpdateError) as excinfo:
        await service.delete_department("d1")
    assert excinfo.value.message == "Department not found"

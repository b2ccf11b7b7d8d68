"""Unit tests for ClientService."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.clients.dtos import ClientDTO
from modules.clients.services import ClientService
from modules.core.exceptions import DuplicateResource, NotFound
from modules.core.unit_of_work import DjangoUnitOfWork

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return ClientService(DjangoUnitOfWork())


def test_create_upper_cases_code(service, owner):
    client = service.create_client(
        ClientDTO(code="sew-02", name="Sewing line", manager_id=owner.id)
    )
    assert client.code == "SEW-02"
    assert service.get_client(str(client.id)).manager_id == owner.id


def test_duplicate_code(service, internal_client):
    with pytest.raises(DuplicateResource):
        service.create_client(ClientDTO(code=internal_client.code.lower(), name="Again"))


def test_unknown_manager(service):
    with pytest.raises(NotFound):
        service.create_client(ClientDTO(code="X", name="X", manager_id=uuid4()))


def test_get_missing(service):
    with pytest.raises(NotFound):
        service.get_client(str(uuid4()))


def test_negative_budget_rejected():
    with pytest.raises(ValidationError):
        ClientDTO(code="X", name="X", annual_budget=Decimal("-1"))


class TestUpdateClient:
    def test_replaces_fields(self, service, internal_client):
        updated = service.update_client(
            str(internal_client.id),
            ClientDTO(code="cut-01", name="Cutting room", location="Floor 2"),
        )
        updated.refresh_from_db()
        assert updated.code == "CUT-01"
        assert updated.name == "Cutting room"
        assert updated.location == "Floor 2"

    def test_code_taken_by_another_client(self, service, internal_client):
        other = service.create_client(ClientDTO(code="PRESS-01", name="Pressing"))
        with pytest.raises(DuplicateResource) as exc_info:
            service.update_client(str(other.id), ClientDTO(code="cut-01", name="Pressing"))
        assert exc_info.value.key == "CUT-01"
        other.refresh_from_db()
        assert other.code == "PRESS-01"

    def test_missing_client(self, service):
        with pytest.raises(NotFound):
            service.update_client(str(uuid4()), ClientDTO(code="X", name="X"))

    def test_unknown_manager(self, service, internal_client):
        with pytest.raises(NotFound) as exc_info:
            service.update_client(
                str(internal_client.id),
                ClientDTO(code="CUT-01", name="Cutting", manager_id=uuid4()),
            )
        assert exc_info.value.kind == "user"

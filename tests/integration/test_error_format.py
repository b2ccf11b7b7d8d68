"""Integration tests for standardized error responses."""

import pytest
from pydantic import BaseModel, ValidationError

from modules.core.exception_handler import DOMAIN_STATUS_CODES, domain_exception_handler
from modules.core.exceptions import DuplicateResource, ResourceInUse

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_auth_error_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401
        data = response.json()
        assert data["type"] == "client_error"
        assert isinstance(data["errors"], list)
        assert data["errors"]
        assert "code" in data["errors"][0]
        assert "detail" in data["errors"][0]

    def test_validation_error_has_standard_format(self, auth_client):
        response = auth_client.post("/api/v1/orders/", data="{", content_type="application/json")
        assert response.status_code == 400
        data = response.json()
        assert data["type"] in {"client_error", "validation_error"}
        assert isinstance(data["errors"], list)

    def test_nested_field_errors_are_flattened(self, auth_client, pending_status):
        response = auth_client.post(
            "/api/v1/orders/",
            {"status_id": str(pending_status.id), "lines": [{"quantity": "x"}]},
            format="json",
        )
        assert response.status_code == 400
        attrs = {e["attr"] for e in response.json()["errors"]}
        assert {"lines.0.item_id", "lines.0.quantity", "lines.0.unit_price"} <= attrs

    def test_method_not_allowed(self, auth_client):
        response = auth_client.put("/api/v1/orders/")
        assert response.status_code == 405
        assert response.json()["type"] == "client_error"


class TestDomainMapping:
    def test_status_codes(self):
        assert DOMAIN_STATUS_CODES["not_found"] == 404
        assert DOMAIN_STATUS_CODES["invalid_order"] == 400
        assert DOMAIN_STATUS_CODES["insufficient_stock"] == 409
        assert DOMAIN_STATUS_CODES["resource_in_use"] == 409

    def test_duplicate_resource_meta(self):
        response = domain_exception_handler(DuplicateResource("supplier", "a@b.example"), {})
        assert response.status_code == 409
        error = response.data["errors"][0]
        assert error["code"] == "duplicate_resource"
        assert error["meta"] == {"kind": "supplier", "key": "a@b.example"}

    def test_resource_in_use_meta(self):
        response = domain_exception_handler(ResourceInUse("role", "r-1", "user"), {})
        assert response.data["errors"][0]["meta"]["blocking_dependent_kind"] == "user"

    def test_pydantic_errors_become_validation_errors(self):
        class Probe(BaseModel):
            quantity: int

        with pytest.raises(ValidationError) as exc_info:
            Probe(quantity="many")

        response = domain_exception_handler(exc_info.value, {})
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"
        assert response.data["errors"][0]["attr"] == "quantity"

    def test_unknown_exception_left_to_django(self):
        assert domain_exception_handler(RuntimeError("boom"), {}) is None

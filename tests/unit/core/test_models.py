"""Unit tests for BaseModel behaviour, exercised through concrete models."""

from __future__ import annotations

import uuid

import pytest

from modules.catalog.models import Category
from modules.clients.models import InternalClient
from modules.statuses.models import StatusCategory, StatusValue

pytestmark = pytest.mark.unit


class TestBaseModel:
    """Tests for UUIDv7 PK and timestamp behaviour."""

    def test_id_is_uuid_version_7(self):
        obj = Category.objects.create(name="test")
        assert isinstance(obj.id, uuid.UUID)
        assert obj.id.version == 7

    def test_ids_are_time_ordered(self):
        a = Category.objects.create(name="first")
        b = Category.objects.create(name="second")
        assert str(a.id) < str(b.id)

    def test_timestamps_set_on_create(self):
        obj = Category.objects.create(name="test")
        assert obj.created_at is not None
        assert obj.updated_at is not None

    def test_updated_at_changes_created_at_does_not(self):
        obj = Category.objects.create(name="original")
        created, updated = obj.created_at, obj.updated_at
        obj.name = "modified"
        obj.save()
        obj.refresh_from_db()
        assert obj.created_at == created
        assert obj.updated_at > updated

    def test_save_with_update_fields_includes_updated_at(self):
        obj = Category.objects.create(name="original")
        original_updated = obj.updated_at
        obj.name = "modified"
        obj.save(update_fields=["name"])
        obj.refresh_from_db()
        assert obj.updated_at > original_updated

    def test_id_is_not_editable(self):
        assert Category._meta.get_field("id").editable is False


class TestNormalizedKeys:
    def test_status_label_normalized_on_save(self):
        status = StatusValue.objects.create(category=StatusCategory.ORDER, label=" in  review ")
        assert status.label == "IN REVIEW"

    def test_client_code_upper_cased(self):
        client = InternalClient.objects.create(code="ass-01", name="Assembly")
        assert client.code == "ASS-01"

    def test_item_code_upper_cased(self, make_item):
        assert make_item(code="btn-black").code == "BTN-BLACK"

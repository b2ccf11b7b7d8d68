from __future__ import annotations

from decimal import Decimal

import pytest

from modules.core.exceptions import InvalidData
from modules.inventory.attributes import (
    FinishedProductAttributes,
    RawMaterialAttributes,
    dump_attributes,
    parse_attributes,
)
from modules.inventory.models import ItemKind

pytestmark = pytest.mark.unit


class TestParseAttributes:
    def test_raw_material(self):
        attrs = parse_attributes(
            ItemKind.RAW_MATERIAL,
            {"material_type": "FABRIC", "roll_width": "1.50"},
        )
        assert isinstance(attrs, RawMaterialAttributes)
        assert attrs.roll_width == Decimal("1.50")

    def test_finished_product(self):
        attrs = parse_attributes(
            "FINISHED_PRODUCT",
            {
                "garment_type": "SHIRT",
                "size": "M",
                "color": "blue",
                "composition": "100% cotton",
            },
        )
        assert isinstance(attrs, FinishedProductAttributes)
        assert attrs.size.value == "M"

    def test_payload_of_other_variant_rejected(self):
        with pytest.raises(InvalidData, match="garment_type"):
            parse_attributes(ItemKind.FINISHED_PRODUCT, {"material_type": "FABRIC"})

    def test_unknown_field_rejected(self):
        with pytest.raises(InvalidData):
            parse_attributes(
                ItemKind.RAW_MATERIAL, {"material_type": "FABRIC", "size": "M"}
            )

    def test_non_positive_width_rejected(self):
        with pytest.raises(InvalidData, match="roll_width"):
            parse_attributes(
                ItemKind.RAW_MATERIAL, {"material_type": "FABRIC", "roll_width": "0"}
            )

    def test_unknown_kind(self):
        with pytest.raises(InvalidData, match="Unknown item kind"):
            parse_attributes("SERVICE", {})


def test_dump_leaves_fabric_supplier_out():
    attrs = RawMaterialAttributes(
        material_type="THREAD",
        fabric_supplier_id="0190a1c2-0000-7000-8000-000000000001",
    )
    assert dump_attributes(attrs) == {"material_type": "THREAD"}

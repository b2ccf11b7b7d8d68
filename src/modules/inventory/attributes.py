"""Variant payloads for ``Item.attributes``.

One pydantic model per ``ItemKind``; ``parse_attributes`` picks the
model from the discriminant and turns validation failures into
``InvalidData``.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Type, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from modules.core.exceptions import InvalidData
from modules.inventory.models import ItemKind


class MaterialType(str, Enum):
    FABRIC = "FABRIC"
    THREAD = "THREAD"
    BUTTON = "BUTTON"
    ZIPPER = "ZIPPER"
    LABEL = "LABEL"
    OTHER = "OTHER"


class GarmentType(str, Enum):
    SHIRT = "SHIRT"
    TROUSERS = "TROUSERS"
    DRESS = "DRESS"
    JACKET = "JACKET"
    OTHER = "OTHER"


class Size(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    ONE_SIZE = "ONE_SIZE"


class RawMaterialAttributes(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    material_type: MaterialType
    roll_width: Optional[Decimal] = None
    weight_per_meter: Optional[Decimal] = None
    fabric_supplier_id: Optional[UUID] = None

    @field_validator("roll_width", "weight_per_meter")
    @classmethod
    def must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Must be greater than zero.")
        return v


class FinishedProductAttributes(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    garment_type: GarmentType
    size: Size
    color: str
    composition: str
    season: Optional[str] = None
    manufactured_on: Optional[date] = None


ItemAttributes = Union[RawMaterialAttributes, FinishedProductAttributes]

ATTRIBUTE_MODELS: Dict[str, Type[BaseModel]] = {
    ItemKind.RAW_MATERIAL: RawMaterialAttributes,
    ItemKind.FINISHED_PRODUCT: FinishedProductAttributes,
}


def parse_attributes(kind: str, data: Dict[str, Any]) -> ItemAttributes:
    model = ATTRIBUTE_MODELS.get(kind)
    if model is None:
        raise InvalidData(f"Unknown item kind '{kind}'.")
    try:
        return model.model_validate(data or {})
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in exc.errors())
        raise InvalidData(f"Invalid {kind} attributes: {fields}.") from exc


def dump_attributes(attributes: ItemAttributes) -> Dict[str, Any]:
    """JSON-ready payload; the fabric supplier lives in its own column."""
    return attributes.model_dump(mode="json", exclude={"fabric_supplier_id"}, exclude_none=True)

import math
import re
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class SpecPair(BaseModel):
    # SKU-level selection axis, e.g. cup size -> large
    spec_id: str
    spec_option_id: str


class AttributePair(BaseModel):
    attribute_option_id: str


class VariantOption(BaseModel):
    sku_id: str
    name: str
    price: float | None = None
    variant_text: str | None = None
    spec_pairs: list[SpecPair] = Field(default_factory=list)
    attribute_pairs: list[AttributePair] = Field(default_factory=list)

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price_string(cls, v: object) -> object:
        """
        Vendor payloads sometimes ship prices as strings ("18.00", "¥18").
        Extract the numeric part; anything non-finite becomes None.
        """
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return float(v) if math.isfinite(v) else None
        if isinstance(v, str):
            match = re.search(r"-?\d+(?:\.\d+)?", v.replace("\xa0", " "))
            return float(match.group()) if match else None
        return v

    def spec_key(self) -> str:
        return "|".join(sorted(f"{p.spec_id}:{p.spec_option_id}" for p in self.spec_pairs))

    def attribute_key(self) -> str:
        return "|".join(sorted(p.attribute_option_id for p in self.attribute_pairs))


class AttributeChoice(BaseModel):
    option_id: str
    name: str
    is_default: bool = False


class AttributeGroup(BaseModel):
    name: str  # e.g. "Ice", "Sweetness"
    choices: list[AttributeChoice]


class AttributeCombination(BaseModel):
    """One choice per attribute group, ready to be layered onto an option."""

    option_ids: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)


class ComboGroup(BaseModel):
    name: str
    cardinality: int = 1
    required: bool = True
    # Raw component records; their shape is vendor-defined.
    choices: list[dict[str, Any]] = Field(default_factory=list)


class ComboComponentSelection(BaseModel):
    group_name: str
    quantity: int = 1
    component: dict[str, Any]


class VariantDimension(BaseModel):
    key: str
    label: str


class ParsedOption(BaseModel):
    option: VariantOption
    summary: str
    values_by_dimension: list[str]


class StageChoice(BaseModel):
    value: str
    price_text: str
    combos: int
    preview_option: VariantOption | None = None


class PickerState(BaseModel):
    spu_id: str | None = None
    options: list[VariantOption]
    parsed_options: list[ParsedOption]
    dimensions: list[VariantDimension]
    stage_index: int = 0
    choice_index: int = 0
    selected_values: list[str | None] = Field(default_factory=list)
    qty: int = Field(default=1, ge=1, le=99)


class CartSelection(BaseModel):
    """The resolved tuple handed to the ordering subsystem on commit."""

    sku_id: str
    spec_pairs: list[SpecPair] = Field(default_factory=list)
    attribute_pairs: list[AttributePair] = Field(default_factory=list)
    variant_text: str | None = None
    qty: int = Field(default=1, ge=1)

    @classmethod
    def from_option(cls, option: VariantOption, qty: int = 1) -> "CartSelection":
        return cls(
            sku_id=option.sku_id,
            spec_pairs=[pair.model_copy() for pair in option.spec_pairs],
            attribute_pairs=[pair.model_copy() for pair in option.attribute_pairs],
            variant_text=option.variant_text,
            qty=max(1, qty),
        )


class PickerTransition(BaseModel):
    # none: nothing to choose; advance: still picking; commit: option resolved
    mode: Literal["none", "advance", "commit"]
    state: PickerState | None = None
    selection: CartSelection | None = None


class MenuItem(BaseModel):
    spu_id: str
    sku_id: str | None = None
    name: str
    price: float | None = None


class MenuCategory(BaseModel):
    id: str
    name: str
    items: list[MenuItem] = Field(default_factory=list)

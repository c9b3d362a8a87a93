"""
Combo (bundle) option builder.

Two upstream shapes are supported:

- Group combos (`comboGroupList`): each group offers choices, e.g. "Main" and
  "Drink". Every group with cardinality <= 1 contributes one selection per
  sellable choice; the groups are then cross-multiplied.
- Fixed bundles (`comboSkuList` at the root): one selection made of every
  listed component, valid only when all of them are sellable.

A group with cardinality N > 1 contributes exactly one selection: its first N
sellable choices. This is a known simplification, not a "choose N of M"
enumeration.

Every resulting option is submitted under the bundle's primary SKU id; the
chosen components only show up in `variant_text` and in the spec/attribute
pairs of the primary component.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from backend.config import ExtractionLimits
from models import ComboComponentSelection, ComboGroup, VariantOption

from .attributes import SEGMENT_SEPARATOR, expand_with_attributes, extract_attribute_groups
from .coerce import first_bool, first_list, first_number, first_string, iter_records
from .dedupe import dedupe_options
from .detail import is_combo_typed
from .fields import (
    ATTRIBUTE_LIST_KEYS,
    COMBO_CHOICE_LIST_KEYS,
    COMBO_COMPONENT_NAME_KEYS,
    COMBO_COMPONENT_QTY_KEYS,
    COMBO_FIXED_LIST_KEYS,
    COMBO_GROUP_CARDINALITY_KEYS,
    COMBO_GROUP_LIST_KEYS,
    COMBO_GROUP_NAME_KEYS,
    COMBO_GROUP_REQUIRED_KEYS,
    COMBO_GROUP_TYPE_KEYS,
    COMBO_PRICE_KEYS,
    ROOT_PRICE_KEYS,
    SKU_ID_KEYS,
    SKU_PRICE_KEYS,
    SPEC_LIST_KEYS,
)
from .sellability import is_sellable, is_stock_tracked, sellable_records
from .simple_options import VARIANT_NAME_SEPARATOR, parse_attribute_pairs, parse_option_names, parse_spec_pairs, root_name, sku_records

logger = logging.getLogger(__name__)

_DEFAULT_GROUP_NAME = "Combo"
_FIXED_BUNDLE_GROUP_NAME = "Bundle"
_DEFAULT_COMPONENT_NAME = "Item"
_REQUIRED_GROUP_TYPE = "must"

Selection = list[ComboComponentSelection]


def parse_combo_groups(detail: Any) -> list[ComboGroup]:
    groups: list[ComboGroup] = []
    for raw_group in iter_records(first_list(detail, COMBO_GROUP_LIST_KEYS)):
        raw_cardinality = first_number(raw_group, COMBO_GROUP_CARDINALITY_KEYS)
        cardinality = math.floor(raw_cardinality) if raw_cardinality is not None else 1
        group_type = (first_string(raw_group, COMBO_GROUP_TYPE_KEYS) or "").lower()
        required = (
            first_bool(raw_group, COMBO_GROUP_REQUIRED_KEYS) is True
            or group_type == _REQUIRED_GROUP_TYPE
            or cardinality > 0
        )
        groups.append(
            ComboGroup(
                name=first_string(raw_group, COMBO_GROUP_NAME_KEYS) or _DEFAULT_GROUP_NAME,
                cardinality=max(1, cardinality),
                required=required,
                choices=iter_records(first_list(raw_group, COMBO_CHOICE_LIST_KEYS)),
            )
        )
    return groups


def is_combo_unavailable(detail: Any) -> bool:
    """
    True when a combo-typed item cannot be bought at all: a required group has
    choices but none of them is sellable, or a fixed bundle has any
    unsellable component.
    """
    if not is_combo_typed(detail):
        return False
    tracked = is_stock_tracked(detail)

    groups = parse_combo_groups(detail)
    if groups:
        return any(
            group.required
            and group.choices
            and not sellable_records(group.choices, stock_tracked=tracked)
            for group in groups
        )

    fixed = iter_records(first_list(detail, COMBO_FIXED_LIST_KEYS))
    if not fixed:
        return False
    return len(sellable_records(fixed, stock_tracked=tracked)) < len(fixed)


def _component_quantity(component: dict[str, Any]) -> int:
    raw = first_number(component, COMBO_COMPONENT_QTY_KEYS)
    return max(1, math.floor(raw)) if raw is not None else 1


def _select(group_name: str, component: dict[str, Any]) -> ComboComponentSelection:
    return ComboComponentSelection(
        group_name=group_name,
        quantity=_component_quantity(component),
        component=component,
    )


def _group_selections(group: ComboGroup, choices: list[dict[str, Any]]) -> list[Selection]:
    if group.cardinality <= 1:
        return [[_select(group.name, choice)] for choice in choices]
    if len(choices) < group.cardinality:
        return []
    # First N sellable choices, deterministically.
    return [[_select(group.name, choice) for choice in choices[: group.cardinality]]]


def _cross_multiply(per_group: list[list[Selection]], limit: int) -> list[Selection]:
    out: list[Selection] = []
    stack: list[tuple[int, Selection]] = [(0, [])]
    while stack and len(out) < limit:
        index, chosen = stack.pop()
        if index >= len(per_group):
            if chosen:
                out.append(chosen)
            continue
        for selection in reversed(per_group[index]):
            stack.append((index + 1, chosen + selection))
    return out


def build_combo_selections(detail: Any, limit: int) -> list[Selection]:
    tracked = is_stock_tracked(detail)
    groups = parse_combo_groups(detail)
    if groups:
        per_group: list[list[Selection]] = []
        for group in groups:
            choices = sellable_records(group.choices, stock_tracked=tracked)
            if not choices:
                if group.required and group.choices:
                    return []
                continue
            selections = _group_selections(group, choices)
            if not selections:
                if group.required:
                    return []
                continue
            per_group.append(selections)
        if not per_group:
            return []
        return _cross_multiply(per_group, limit)

    fixed = iter_records(first_list(detail, COMBO_FIXED_LIST_KEYS))
    if not fixed:
        return []
    available = sellable_records(fixed, stock_tracked=tracked)
    if len(available) < len(fixed):
        return []
    return [[_select(_FIXED_BUNDLE_GROUP_NAME, component) for component in available]]


def pick_primary_sku(detail: Any) -> dict[str, Any] | None:
    """First sellable SKU record, else the first SKU record at all."""
    records = sku_records(detail)
    tracked = is_stock_tracked(detail)
    for sku in records:
        if is_sellable(sku, stock_tracked=tracked):
            return sku
    return records[0] if records else None


def resolve_combo_price(selection: Selection, base_price: float | None) -> float | None:
    combo_prices = [
        price
        for price in (first_number(entry.component, COMBO_PRICE_KEYS) for entry in selection)
        if price is not None
    ]
    if combo_prices:
        total = sum(combo_prices)
        if total > 0 or base_price is None:
            return total
    return base_price


def _primary_component(selection: Selection) -> ComboComponentSelection:
    for entry in selection:
        if first_list(entry.component, SPEC_LIST_KEYS) or extract_attribute_groups(entry.component):
            return entry
    return selection[0]


def _component_label(entry: ComboComponentSelection) -> str:
    name = first_string(entry.component, COMBO_COMPONENT_NAME_KEYS) or _DEFAULT_COMPONENT_NAME
    suffix = f" x{entry.quantity}" if entry.quantity > 1 else ""
    return f"{entry.group_name}: {name}{suffix}"


def options_for_selection(
    selection: Selection,
    bundle_sku_id: str,
    name: str,
    base_price: float | None,
    limits: ExtractionLimits,
) -> list[VariantOption]:
    if not selection:
        return []
    primary = _primary_component(selection)
    spec_list = first_list(primary.component, SPEC_LIST_KEYS)

    parts = [_component_label(entry) for entry in selection]
    spec_names = parse_option_names(spec_list)
    if spec_names:
        parts.append(f"Variant: {VARIANT_NAME_SEPARATOR.join(spec_names)}")

    option = VariantOption(
        sku_id=bundle_sku_id,
        name=name,
        price=resolve_combo_price(selection, base_price),
        variant_text=SEGMENT_SEPARATOR.join(parts),
        spec_pairs=parse_spec_pairs(spec_list),
        attribute_pairs=parse_attribute_pairs(first_list(primary.component, ATTRIBUTE_LIST_KEYS)),
    )
    return expand_with_attributes([option], primary.component, limits=limits)


def build_combo_options(
    detail: dict[str, Any],
    *,
    limits: ExtractionLimits | None = None,
) -> list[VariantOption]:
    limits = limits or ExtractionLimits()
    limit = limits.max_combo_options

    records = sku_records(detail)
    if is_combo_typed(detail) and records:
        if not sellable_records(records, stock_tracked=True):
            return []

    primary_sku = pick_primary_sku(detail)
    bundle_sku_id = first_string(primary_sku, SKU_ID_KEYS) or first_string(detail, SKU_ID_KEYS)
    if bundle_sku_id is None:
        return []

    base_price = first_number(primary_sku, SKU_PRICE_KEYS)
    if base_price is None:
        base_price = first_number(detail, ROOT_PRICE_KEYS)

    selections = build_combo_selections(detail, limit)
    if not selections:
        return []

    name = root_name(detail) or bundle_sku_id
    out: list[VariantOption] = []
    for selection in selections:
        out.extend(options_for_selection(selection, bundle_sku_id, name, base_price, limits))
        if len(out) >= limit:
            logger.info("Combo %s reached the %d option limit", bundle_sku_id, limit)
            break
    return dedupe_options(out)[:limit]

from typing import Any

from models import AttributePair, SpecPair, VariantOption

from .coerce import first_list, first_number, first_string, iter_records
from .fields import (
    ATTRIBUTE_LIST_KEYS,
    ATTRIBUTE_OPTION_ID_KEYS,
    FALLBACK_PRICE_KEYS,
    OPTION_DISPLAY_NAME_KEYS,
    ROOT_NAME_KEYS,
    SKU_ID_KEYS,
    SKU_LIST_KEYS,
    SKU_NAME_KEYS,
    SKU_PRICE_KEYS,
    SPEC_ID_KEYS,
    SPEC_LIST_KEYS,
    SPEC_OPTION_ID_KEYS,
)
from .sellability import is_sellable, is_stock_tracked

VARIANT_NAME_SEPARATOR = " + "


def sku_records(detail: Any) -> list[dict[str, Any]]:
    return iter_records(first_list(detail, SKU_LIST_KEYS))


def root_name(detail: Any) -> str:
    return first_string(detail, ROOT_NAME_KEYS) or ""


def parse_spec_pairs(raw_list: Any) -> list[SpecPair]:
    pairs: list[SpecPair] = []
    for raw in iter_records(raw_list):
        spec_id = first_string(raw, SPEC_ID_KEYS)
        spec_option_id = first_string(raw, SPEC_OPTION_ID_KEYS)
        if spec_id is None or spec_option_id is None:
            continue
        pairs.append(SpecPair(spec_id=spec_id, spec_option_id=spec_option_id))
    return pairs


def parse_attribute_pairs(raw_list: Any) -> list[AttributePair]:
    pairs: list[AttributePair] = []
    for raw in iter_records(raw_list):
        option_id = first_string(raw, ATTRIBUTE_OPTION_ID_KEYS)
        if option_id is None:
            continue
        pairs.append(AttributePair(attribute_option_id=option_id))
    return pairs


def parse_option_names(raw_list: Any) -> list[str]:
    names: list[str] = []
    for raw in iter_records(raw_list):
        name = first_string(raw, OPTION_DISPLAY_NAME_KEYS)
        if name is not None:
            names.append(name)
    return names


def build_simple_options(detail: dict[str, Any], *, stock_tracked: bool = False) -> list[VariantOption]:
    """
    Turn the item's flat SKU list into variant options.

    Unsellable SKUs and SKUs without an id are skipped. Combo-typed items
    and stock-limited items always have their SKUs checked against stock.
    """
    tracked = stock_tracked or is_stock_tracked(detail)
    fallback_name = root_name(detail)

    options: list[VariantOption] = []
    for sku in sku_records(detail):
        if not is_sellable(sku, stock_tracked=tracked):
            continue
        sku_id = first_string(sku, SKU_ID_KEYS)
        if sku_id is None:
            continue

        spec_list = first_list(sku, SPEC_LIST_KEYS)
        attribute_list = first_list(sku, ATTRIBUTE_LIST_KEYS)
        display_names = parse_option_names(spec_list) + parse_option_names(attribute_list)

        options.append(
            VariantOption(
                sku_id=sku_id,
                name=first_string(sku, SKU_NAME_KEYS) or fallback_name or sku_id,
                price=first_number(sku, SKU_PRICE_KEYS),
                variant_text=VARIANT_NAME_SEPARATOR.join(display_names) or None,
                spec_pairs=parse_spec_pairs(spec_list),
                attribute_pairs=parse_attribute_pairs(attribute_list),
            )
        )
    return options


def build_fallback_option(detail: dict[str, Any]) -> list[VariantOption]:
    """
    Legacy payloads expose a single root-level SKU and no SKU list at all.
    Returns an empty list when even the root has no skuId.
    """
    sku_id = first_string(detail, SKU_ID_KEYS)
    if sku_id is None:
        return []
    return [
        VariantOption(
            sku_id=sku_id,
            name=root_name(detail) or sku_id,
            price=first_number(detail, FALLBACK_PRICE_KEYS),
        )
    ]

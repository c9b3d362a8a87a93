"""
Menu listing extraction: vendor category payloads -> MenuCategory list.

Category arrays are searched at the envelope root and one level down under
`data`. Items are taken from the first recognised item array on a category,
or flattened from nested item groups when the category has none.
"""
from typing import Any

from models import MenuCategory, MenuItem

from .coerce import as_list, as_record, first_number, first_string, iter_records
from .combo_options import is_combo_unavailable
from .fields import (
    MENU_CATEGORY_ARRAY_KEYS,
    MENU_CATEGORY_ID_KEYS,
    MENU_CATEGORY_NAME_KEYS,
    MENU_GROUP_ARRAY_KEYS,
    MENU_ITEM_ARRAY_KEYS,
    MENU_ITEM_NAME_KEYS,
    MENU_ITEM_PRICE_KEYS,
    MENU_ITEM_SKU_ID_KEYS,
    MENU_ITEM_SPU_ID_KEYS,
)
from .sellability import is_sellable


def extract_menu_categories(envelope: Any) -> list[MenuCategory]:
    candidates: list[Any] = [envelope]
    root = as_record(envelope)
    if root is not None:
        candidates.extend(root.get(key) for key in MENU_CATEGORY_ARRAY_KEYS)
        nested = as_record(root.get("data"))
        if nested is not None:
            candidates.extend(nested.get(key) for key in MENU_CATEGORY_ARRAY_KEYS)

    for candidate in candidates:
        categories = _map_category_array(candidate)
        if categories:
            return categories
    return []


def map_menu_item(raw: Any) -> MenuItem | None:
    """Map one raw item; None when it lacks an id/name or cannot be bought right now."""
    if not isinstance(raw, dict):
        return None
    spu_id = first_string(raw, MENU_ITEM_SPU_ID_KEYS)
    name = first_string(raw, MENU_ITEM_NAME_KEYS)
    if spu_id is None or name is None:
        return None
    if not is_sellable(raw) or is_combo_unavailable(raw):
        return None
    return MenuItem(
        spu_id=spu_id,
        sku_id=first_string(raw, MENU_ITEM_SKU_ID_KEYS),
        name=name,
        price=first_number(raw, MENU_ITEM_PRICE_KEYS),
    )


def dedupe_menu_items(items: list[MenuItem]) -> list[MenuItem]:
    seen: set[str] = set()
    out: list[MenuItem] = []
    for item in items:
        key = f"{item.spu_id}:{item.sku_id or ''}"
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def _map_items(raw: Any) -> list[MenuItem]:
    return [item for item in (map_menu_item(entry) for entry in as_list(raw) or []) if item]


def _category_items(category: dict[str, Any]) -> list[MenuItem]:
    for key in MENU_ITEM_ARRAY_KEYS:
        items = _map_items(category.get(key))
        if items:
            return dedupe_menu_items(items)

    grouped: list[MenuItem] = []
    for group_key in MENU_GROUP_ARRAY_KEYS:
        for group in iter_records(category.get(group_key)):
            for item_key in MENU_ITEM_ARRAY_KEYS:
                grouped.extend(_map_items(group.get(item_key)))
    return dedupe_menu_items(grouped)


def _map_category(raw: dict[str, Any]) -> MenuCategory | None:
    category_id = first_string(raw, MENU_CATEGORY_ID_KEYS)
    name = first_string(raw, MENU_CATEGORY_NAME_KEYS)
    if category_id is None and name is None:
        return None
    items = _category_items(raw)
    if not items:
        return None
    return MenuCategory(id=category_id or name, name=name or category_id, items=items)


def _map_category_array(raw: Any) -> list[MenuCategory]:
    categories = [c for c in (_map_category(entry) for entry in iter_records(raw)) if c]
    return _merge_categories(categories)


def _merge_categories(categories: list[MenuCategory]) -> list[MenuCategory]:
    """Merge categories sharing an id (or name), case-insensitively."""
    merged: list[MenuCategory] = []
    index_by_key: dict[str, int] = {}
    for category in categories:
        key = (category.id or category.name).strip().lower()
        if key in index_by_key:
            existing = merged[index_by_key[key]]
            existing.items = dedupe_menu_items(existing.items + category.items)
            continue
        index_by_key[key] = len(merged)
        merged.append(category.model_copy(update={"items": dedupe_menu_items(category.items)}))
    return [category for category in merged if category.items]

from typing import Any

from .coerce import first_string
from .fields import COMBO_FIXED_LIST_KEYS, COMBO_GROUP_LIST_KEYS, COMBO_SPU_TYPE, DETAIL_WRAPPER_KEYS, SPU_TYPE_KEYS


def normalize_item_detail(envelope: Any) -> dict[str, Any]:
    """
    Unwrap a vendor envelope into the canonical item detail record.

    The first wrapper key holding a dict wins; otherwise the envelope is
    assumed to already be canonical. Non-dict input yields an empty record.
    """
    if not isinstance(envelope, dict):
        return {}
    for key in DETAIL_WRAPPER_KEYS:
        nested = envelope.get(key)
        if isinstance(nested, dict):
            return nested
    return envelope


def spu_type(record: Any) -> str:
    return (first_string(record, SPU_TYPE_KEYS) or "").strip().lower()


def is_combo_typed(record: Any) -> bool:
    return spu_type(record) == COMBO_SPU_TYPE


def has_combo_structure(record: Any) -> bool:
    if not isinstance(record, dict):
        return False
    return any(
        isinstance(record.get(key), list) and record[key]
        for key in COMBO_GROUP_LIST_KEYS + COMBO_FIXED_LIST_KEYS
    )


def is_combo_item(detail: Any) -> bool:
    return is_combo_typed(detail) or has_combo_structure(detail)

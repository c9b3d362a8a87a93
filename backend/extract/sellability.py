"""
Sellability policy for SKUs, combo components and combo-group choices.

Signals are evaluated in a fixed order and the first decisive one wins:

  1. saleOut true                     -> unsellable
  2. soldOut / outOfStock true        -> unsellable
  3. canSale / available false        -> unsellable
  4. numeric status <= 0              -> unsellable
  5. stock <= 0, but only for stock-tracked records (combo-typed, flagged
     stockLimit, or stock_tracked=True from the owning item)

Plain items routinely carry a stray `stock: 0` without tracking inventory, so
rule 5 must not apply to them.
"""
from typing import Any

from .coerce import first_bool, first_number
from .detail import is_combo_typed
from .fields import CAN_SELL_KEYS, SALE_OUT_KEYS, SOLD_OUT_KEYS, STATUS_KEYS, STOCK_KEYS, STOCK_LIMIT_KEYS


def is_stock_tracked(record: Any) -> bool:
    return is_combo_typed(record) or first_bool(record, STOCK_LIMIT_KEYS) is True


def is_sellable(record: Any, *, stock_tracked: bool = False) -> bool:
    if not isinstance(record, dict):
        return False

    if first_bool(record, SALE_OUT_KEYS) is True:
        return False
    if first_bool(record, SOLD_OUT_KEYS) is True:
        return False
    if first_bool(record, CAN_SELL_KEYS) is False:
        return False

    status = first_number(record, STATUS_KEYS)
    if status is not None and status <= 0:
        return False

    if stock_tracked or is_stock_tracked(record):
        stock = first_number(record, STOCK_KEYS)
        if stock is not None and stock <= 0:
            return False

    return True


def sellable_records(records: list[Any], *, stock_tracked: bool = False) -> list[dict[str, Any]]:
    return [record for record in records if is_sellable(record, stock_tracked=stock_tracked)]

"""
Variant resolution entry point.

    envelope -> normalize -> sellability gate -> combo / simple builder
             -> attribute cross-expansion -> dedupe -> (root fallback)

Nothing here raises on malformed input. Callers receive an empty list when no
sellable variant can be produced and should present that as "no sellable
variants" rather than as an error.
"""
from __future__ import annotations

import logging
from typing import Any

from backend.config import ExtractionLimits
from models import VariantOption

from .attributes import expand_with_attributes
from .combo_options import build_combo_options, is_combo_unavailable
from .dedupe import dedupe_options
from .detail import is_combo_item, normalize_item_detail
from .sellability import is_sellable
from .simple_options import build_fallback_option, build_simple_options

logger = logging.getLogger(__name__)


def extract_variant_options(
    envelope: Any,
    *,
    limits: ExtractionLimits | None = None,
) -> list[VariantOption]:
    """
    Resolve the sellable variants of one item from its vendor detail payload.

    Args:
        envelope: Raw item-detail JSON as returned upstream (any shape).
        limits:   Combinatorial bounds. Defaults to `ExtractionLimits.from_env()`.

    Returns:
        Ordered, deduplicated options. Each option's `sku_id` is what the
        ordering subsystem expects.

    Example:
        ```python
        options = extract_variant_options({"data": {"skuList": [...]}})
        for option in options:
            print(option.sku_id, option.variant_text, option.price)
        ```
    """
    limits = limits or ExtractionLimits.from_env()
    detail = normalize_item_detail(envelope)
    if not detail:
        return []
    if not is_sellable(detail):
        logger.debug("Item detail is not sellable; no options")
        return []

    if is_combo_item(detail):
        if is_combo_unavailable(detail):
            logger.debug("Combo item has an unavailable required component; no options")
            return []
        combo_options = build_combo_options(detail, limits=limits)
        if combo_options:
            return dedupe_options(expand_with_attributes(combo_options, detail, limits=limits))

    options = build_simple_options(detail)
    if options:
        return dedupe_options(expand_with_attributes(options, detail, limits=limits))

    return build_fallback_option(detail)

"""
Item-level attribute groups (ice, sweetness, toppings, ...) and their
cross-expansion onto SKU or combo options.

Attribute groups live on the item, not on its SKUs, so every option the
builders produce is multiplied by every combination of attribute choices.
The full cross product is only enumerated when it fits inside
`ExtractionLimits.max_attribute_combinations`; above that every option gets a
single combination made of each group's default choice.
"""
from __future__ import annotations

import logging
import math
from typing import Any

from backend.config import ExtractionLimits
from models import AttributeChoice, AttributeCombination, AttributeGroup, AttributePair, VariantOption

from .coerce import first_bool, first_list, first_string, iter_records
from .dedupe import dedupe_options
from .fields import (
    ATTRIBUTE_CHOICE_ID_KEYS,
    ATTRIBUTE_CHOICE_LIST_KEYS,
    ATTRIBUTE_CHOICE_NAME_KEYS,
    ATTRIBUTE_DEFAULT_KEYS,
    ATTRIBUTE_GROUP_LIST_KEYS,
    ATTRIBUTE_GROUP_NAME_KEYS,
)

logger = logging.getLogger(__name__)

SEGMENT_SEPARATOR = " | "
_DEFAULT_GROUP_NAME = "Option"


def extract_attribute_groups(record: Any) -> list[AttributeGroup]:
    groups: list[AttributeGroup] = []
    for raw_group in iter_records(first_list(record, ATTRIBUTE_GROUP_LIST_KEYS)):
        choices: list[AttributeChoice] = []
        for raw_choice in iter_records(first_list(raw_group, ATTRIBUTE_CHOICE_LIST_KEYS)):
            option_id = first_string(raw_choice, ATTRIBUTE_CHOICE_ID_KEYS)
            name = first_string(raw_choice, ATTRIBUTE_CHOICE_NAME_KEYS)
            if option_id is None or name is None:
                continue
            choices.append(
                AttributeChoice(
                    option_id=option_id,
                    name=name,
                    is_default=first_bool(raw_choice, ATTRIBUTE_DEFAULT_KEYS) is True,
                )
            )
        if not choices:
            continue
        # Stable: defaults first, vendor order otherwise.
        choices.sort(key=lambda choice: not choice.is_default)
        groups.append(
            AttributeGroup(
                name=first_string(raw_group, ATTRIBUTE_GROUP_NAME_KEYS) or _DEFAULT_GROUP_NAME,
                choices=choices,
            )
        )
    return groups


def cross_product_size(groups: list[AttributeGroup]) -> int:
    return math.prod(max(1, len(group.choices)) for group in groups)


def collapsed_combination(groups: list[AttributeGroup]) -> AttributeCombination:
    """One combination built from each group's default (or first) choice."""
    combination = AttributeCombination()
    for group in groups:
        if not group.choices:
            continue
        chosen = next((c for c in group.choices if c.is_default), group.choices[0])
        combination.option_ids.append(chosen.option_id)
        combination.labels.append(f"{group.name}: {chosen.name}")
    return combination


def enumerate_attribute_combinations(
    groups: list[AttributeGroup], limit: int
) -> list[AttributeCombination]:
    if not groups:
        return [AttributeCombination()]

    total = cross_product_size(groups)
    if total > limit:
        logger.info(
            "Attribute cross product of %d exceeds limit %d; collapsing to defaults",
            total,
            limit,
        )
        return [collapsed_combination(groups)]

    out: list[AttributeCombination] = []
    # (next group index, chosen ids, labels); children pushed reversed so the
    # first choice of each group is expanded first.
    stack: list[tuple[int, list[str], list[str]]] = [(0, [], [])]
    while stack and len(out) < limit:
        index, option_ids, labels = stack.pop()
        if index >= len(groups):
            out.append(AttributeCombination(option_ids=option_ids, labels=labels))
            continue
        group = groups[index]
        if not group.choices:
            stack.append((index + 1, option_ids, labels))
            continue
        for choice in reversed(group.choices):
            stack.append(
                (
                    index + 1,
                    option_ids + [choice.option_id],
                    labels + [f"{group.name}: {choice.name}"],
                )
            )
    return out or [AttributeCombination()]


def merge_attribute_ids(
    existing: list[AttributePair], extra_ids: list[str]
) -> list[AttributePair]:
    merged: list[AttributePair] = []
    seen: set[str] = set()
    for option_id in [pair.attribute_option_id for pair in existing] + extra_ids:
        if not option_id or option_id in seen:
            continue
        seen.add(option_id)
        merged.append(AttributePair(attribute_option_id=option_id))
    return merged


def apply_combination(option: VariantOption, combination: AttributeCombination) -> VariantOption:
    parts: list[str] = []
    base_text = option.variant_text or option.name
    if base_text:
        parts.append(base_text)
    parts.extend(combination.labels)
    return option.model_copy(
        update={
            "variant_text": SEGMENT_SEPARATOR.join(parts) or option.variant_text,
            "attribute_pairs": merge_attribute_ids(option.attribute_pairs, combination.option_ids),
        }
    )


def expand_with_attributes(
    options: list[VariantOption],
    record: Any,
    *,
    limits: ExtractionLimits | None = None,
) -> list[VariantOption]:
    """
    Cross-multiply `options` with the attribute groups declared on `record`
    (an item detail or a combo component).

    Returns the input unchanged when there are no groups, or when
    deduplication would leave nothing.
    """
    groups = extract_attribute_groups(record)
    if not groups:
        return options

    limit = (limits or ExtractionLimits()).max_attribute_combinations
    combinations = enumerate_attribute_combinations(groups, limit)

    expanded = [
        apply_combination(option, combination)
        for option in options
        for combination in combinations
    ]
    deduped = dedupe_options(expanded)
    return deduped or options

"""
Staged variant picker.

The picker walks the option dimensions one stage at a time. At each stage the
user sees the values still compatible with what they picked on earlier
stages, grouped with a price range and the number of matching combinations.
Picking a value on the last stage resolves a concrete option.

All transitions are pure: they take a PickerState and return a new one (or a
PickerTransition), leaving the input untouched.
"""
from __future__ import annotations

import logging

from models import CartSelection, ParsedOption, PickerState, PickerTransition, StageChoice, VariantOption

from .dimensions import MISSING_VALUE, extract_dimensions

logger = logging.getLogger(__name__)

MIN_QTY = 1
MAX_QTY = 99


def clamp_index(index: int, length: int) -> int:
    if length <= 0 or index < 0:
        return 0
    return min(index, length - 1)


def create_picker(
    options: list[VariantOption],
    *,
    current_sku_id: str | None = None,
    spu_id: str | None = None,
) -> PickerState | None:
    """
    Open a picker over `options`. Returns None when there is nothing to pick.

    The option matching `current_sku_id` (else the first option) seeds the
    selected value of every stage.
    """
    if not options:
        return None

    dimensions, parsed_options = extract_dimensions(options)
    seed_index = next(
        (i for i, option in enumerate(options) if current_sku_id and option.sku_id == current_sku_id),
        0,
    )
    seed = parsed_options[seed_index]
    state = PickerState(
        spu_id=spu_id,
        options=options,
        parsed_options=parsed_options,
        dimensions=dimensions,
        stage_index=0,
        choice_index=0,
        selected_values=list(seed.values_by_dimension),
        qty=MIN_QTY,
    )
    return sync_picker(state)


def matches_selections(
    parsed: ParsedOption, selected_values: list[str | None], until_stage: int
) -> bool:
    """True when `parsed` agrees with every selection before `until_stage`; unset ones match anything."""
    for index in range(until_stage):
        selected = selected_values[index] if index < len(selected_values) else None
        if not selected:
            continue
        value = (
            parsed.values_by_dimension[index]
            if index < len(parsed.values_by_dimension)
            else MISSING_VALUE
        )
        if value != selected:
            return False
    return True


def render_price_range(prices: list[float]) -> str:
    if not prices:
        return "-"
    low, high = min(prices), max(prices)
    if low == high:
        return f"{low:.2f}"
    return f"{low:.2f}-{high:.2f}"


def stage_choices(state: PickerState) -> list[StageChoice]:
    if not state.dimensions:
        return []
    stage = clamp_index(state.stage_index, len(state.dimensions))

    grouped: dict[str, tuple[list[float], int, VariantOption]] = {}
    for parsed in state.parsed_options:
        if not matches_selections(parsed, state.selected_values, stage):
            continue
        value = (
            parsed.values_by_dimension[stage]
            if stage < len(parsed.values_by_dimension)
            else MISSING_VALUE
        )
        price = parsed.option.price
        if value in grouped:
            prices, combos, preview = grouped[value]
            if price is not None:
                prices.append(price)
            grouped[value] = (prices, combos + 1, preview)
            continue
        grouped[value] = ([price] if price is not None else [], 1, parsed.option)

    return [
        StageChoice(
            value=value,
            price_text=render_price_range(prices),
            combos=combos,
            preview_option=preview,
        )
        for value, (prices, combos, preview) in grouped.items()
    ]


def sync_picker(state: PickerState) -> PickerState:
    """
    Normalise stage/cursor after a transition: the cursor points at the
    stage's selected value when it is still offered, and an unset selection is
    seeded with the highlighted choice.
    """
    if not state.dimensions:
        return state

    stage = clamp_index(state.stage_index, len(state.dimensions))
    selected = list(state.selected_values)
    selected.extend([None] * (len(state.dimensions) - len(selected)))
    choices = stage_choices(state.model_copy(update={"stage_index": stage, "selected_values": selected}))

    if not choices:
        return state.model_copy(
            update={"stage_index": stage, "choice_index": 0, "selected_values": selected}
        )

    current = selected[stage]
    matched = next((i for i, c in enumerate(choices) if c.value == current), -1) if current is not None else -1
    choice_index = matched if matched >= 0 else clamp_index(state.choice_index, len(choices))
    if selected[stage] is None:
        selected[stage] = choices[choice_index].value

    return state.model_copy(
        update={"stage_index": stage, "choice_index": choice_index, "selected_values": selected}
    )


def move_choice(state: PickerState, delta: int) -> PickerState:
    count = len(stage_choices(state))
    return state.model_copy(update={"choice_index": clamp_index(state.choice_index + delta, count)})


def adjust_qty(state: PickerState, delta: int) -> PickerState:
    return state.model_copy(update={"qty": max(MIN_QTY, min(MAX_QTY, state.qty + delta))})


def resolve_option(state: PickerState) -> VariantOption | None:
    """
    Prefer an option whose values equal the full selection; otherwise the
    first option compatible with it, treating unset stages as wildcards.
    """
    if not state.parsed_options or not state.dimensions:
        return None
    selected = state.selected_values

    def _selected(index: int) -> str | None:
        return selected[index] if index < len(selected) else None

    for parsed in state.parsed_options:
        if all(
            _selected(i) is not None and value == _selected(i)
            for i, value in enumerate(parsed.values_by_dimension)
        ):
            return parsed.option

    for parsed in state.parsed_options:
        if all(
            _selected(i) is None or value == _selected(i)
            for i, value in enumerate(parsed.values_by_dimension)
        ):
            return parsed.option
    return None


def advance(state: PickerState, choice_index: int | None = None) -> PickerTransition:
    """
    Commit the highlighted (or given) choice for the current stage.

    - not the last stage: move to the next stage, later selections cleared
    - last stage: resolve the option and return a commit with the CartSelection
    - last stage but nothing resolves: stay put on the final stage
    """
    choices = stage_choices(state)
    index = clamp_index(state.choice_index if choice_index is None else choice_index, len(choices))
    if not choices:
        return PickerTransition(mode="none")
    chosen = choices[index]

    stage = clamp_index(state.stage_index, len(state.dimensions))
    selected = list(state.selected_values)
    selected.extend([None] * (len(state.dimensions) - len(selected)))
    selected[stage] = chosen.value
    for later in range(stage + 1, len(selected)):
        selected[later] = None

    if stage + 1 < len(state.dimensions):
        next_state = sync_picker(
            state.model_copy(
                update={"selected_values": selected, "stage_index": stage + 1, "choice_index": 0}
            )
        )
        return PickerTransition(mode="advance", state=next_state)

    completed = sync_picker(
        state.model_copy(update={"selected_values": selected, "stage_index": stage, "choice_index": index})
    )
    option = resolve_option(completed)
    if option is None:
        logger.debug("No option matches selection %s; staying on final stage", selected)
        return PickerTransition(mode="advance", state=completed)
    return PickerTransition(
        mode="commit",
        state=completed,
        selection=CartSelection.from_option(option, completed.qty),
    )


def back(state: PickerState) -> PickerState | None:
    """Step back one stage; None means the picker is closed."""
    stage = clamp_index(state.stage_index, len(state.dimensions))
    if stage <= 0:
        return None
    return sync_picker(state.model_copy(update={"stage_index": stage - 1}))


def retain_if_visible(state: PickerState, visible_spu_ids: set[str]) -> PickerState | None:
    """Drop the picker once its item is no longer in the current menu view."""
    if state.spu_id is None or state.spu_id in visible_spu_ids:
        return state
    return None

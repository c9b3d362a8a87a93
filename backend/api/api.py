"""
Variant resolution API.

Stateless: picker state travels with each request and the updated state is
returned in the response, so no session storage is needed server-side.
"""

import logging
from typing import Any

from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

from backend.corpus import PAYLOADS, load_payload
from backend.extract import extract_menu_categories, extract_variant_options
from backend.picker import advance, back, create_picker, stage_choices
from models import MenuCategory, PickerState, PickerTransition, StageChoice, VariantOption

logger = logging.getLogger(__name__)

app = FastAPI(title="Menu Variant API")


class PickerOpenRequest(BaseModel):
    options: list[VariantOption]
    current_sku_id: str | None = None
    spu_id: str | None = None


class PickerAdvanceRequest(BaseModel):
    state: PickerState
    choice_index: int | None = Field(default=None, ge=0)


class PickerBackRequest(BaseModel):
    state: PickerState


class PickerView(BaseModel):
    closed: bool = False
    state: PickerState | None = None
    choices: list[StageChoice] = Field(default_factory=list)


class PickerAdvanceView(PickerView):
    transition: PickerTransition


def _view(state: PickerState | None) -> PickerView:
    if state is None:
        return PickerView(closed=True)
    return PickerView(state=state, choices=stage_choices(state))


@app.post("/menu", response_model=list[MenuCategory])
def menu(envelope: Any = Body(...)) -> list[MenuCategory]:
    return extract_menu_categories(envelope)


@app.post("/variants", response_model=list[VariantOption])
def variants(envelope: Any = Body(...)) -> list[VariantOption]:
    options = extract_variant_options(envelope)
    if not options:
        logger.info("No sellable variants in submitted payload")
    return options


@app.get("/samples", response_model=list[str])
def list_samples() -> list[str]:
    return sorted(PAYLOADS)


@app.get("/samples/{name}/variants", response_model=list[VariantOption])
def sample_variants(name: str) -> list[VariantOption]:
    if name not in PAYLOADS:
        raise HTTPException(status_code=404, detail=f"Sample '{name}' not found")
    return extract_variant_options(load_payload(name))


@app.post("/picker", response_model=PickerView)
def open_picker(request: PickerOpenRequest) -> PickerView:
    state = create_picker(
        request.options, current_sku_id=request.current_sku_id, spu_id=request.spu_id
    )
    if state is None:
        raise HTTPException(status_code=409, detail="No sellable variants to pick from")
    return _view(state)


@app.post("/picker/advance", response_model=PickerAdvanceView)
def advance_picker(request: PickerAdvanceRequest) -> PickerAdvanceView:
    transition = advance(request.state, request.choice_index)
    state = transition.state or request.state
    return PickerAdvanceView(
        state=state,
        choices=stage_choices(state),
        transition=transition,
    )


@app.post("/picker/back", response_model=PickerView)
def back_picker(request: PickerBackRequest) -> PickerView:
    return _view(back(request.state))

"""
Paths and payload registry for the sample item-detail corpus.

Single source of truth for:
- DATA_DIR:     repository data directory
- PAYLOADS_DIR: raw vendor item-detail envelopes (one JSON file per item)
- VARIANTS_DIR: where seed.py writes resolved variant options
- PAYLOADS:     the sample payloads, by name
"""

import json
from pathlib import Path
from typing import Any

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
PAYLOADS_DIR: Path = DATA_DIR / "payloads"
VARIANTS_DIR: Path = DATA_DIR / "variants"

# payload name -> file under PAYLOADS_DIR
PAYLOADS: dict[str, str] = {
    "milk_tea": "milk_tea.json",
    "combo_meal": "combo_meal.json",
    "fixed_bundle": "fixed_bundle.json",
    "legacy_root_sku": "legacy_root_sku.json",
    "sold_out_limited": "sold_out_limited.json",
    "menu": "menu.json",
}


def load_payload(name: str) -> Any:
    """Load a sample payload by registry name. Raises KeyError / FileNotFoundError."""
    path = PAYLOADS_DIR / PAYLOADS[name]
    return json.loads(path.read_text(encoding="utf-8"))

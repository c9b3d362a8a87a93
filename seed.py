"""
Seed script: runs variant resolution for every sample payload and writes the
resolved options to data/variants/{name}.json.

Usage:
    python seed.py
"""

import json
import logging

from backend.config import ExtractionLimits
from backend.corpus import PAYLOADS, VARIANTS_DIR, load_payload
from backend.extract import extract_variant_options
from models import VariantOption

logger = logging.getLogger(__name__)

# Listing payloads, not item details.
_NON_DETAIL_PAYLOADS = frozenset({"menu"})


def seed_payload(name: str, limits: ExtractionLimits) -> list[VariantOption]:
    return extract_variant_options(load_payload(name), limits=limits)


def _write_variants(name: str, options: list[VariantOption]) -> None:
    out_path = VARIANTS_DIR / f"{name}.json"
    payload = [option.model_dump(mode="json") for option in options]
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False))
    logger.info("Wrote %s (%d options)", out_path.name, len(options))


def seed_all() -> dict[str, list[VariantOption]]:
    VARIANTS_DIR.mkdir(parents=True, exist_ok=True)
    limits = ExtractionLimits.from_env()

    names = [name for name in PAYLOADS if name not in _NON_DETAIL_PAYLOADS]
    logger.info("Seeding %d payloads...", len(names))

    seeded: dict[str, list[VariantOption]] = {}
    for name in names:
        try:
            options = seed_payload(name, limits)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Failed to seed %s: %s", name, exc)
            continue
        if not options:
            logger.warning("%s has no sellable variants", name)
        _write_variants(name, options)
        seeded[name] = options

    logger.info("Seeded %d/%d payloads.", len(seeded), len(names))
    return seeded


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    seed_all()

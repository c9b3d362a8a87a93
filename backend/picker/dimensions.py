"""
Dimension extraction: recover selection axes from option display text.

Options carry their variant as text like "Large | Ice: Less | Sugar: 50%".
Each `|`-separated segment is either labeled ("Ice: Less") or bare ("Large").
Bare segments become "Variant", "Variant 2", ... in order of appearance.

Dimensions are ordered so that the axes customers decide first (size, milk,
cup) come before ice, then sweetness, then everything else.
"""
import re
from dataclasses import dataclass

from models import ParsedOption, VariantDimension, VariantOption

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

VARIANT_KEY = "variant"
VARIANT_LABEL = "Variant"
MISSING_VALUE = "-"

# (tier, substrings) checked in order against "<key> <label>"
_PRIORITY_TIERS: tuple[tuple[int, tuple[str, ...]], ...] = (
    (0, ("size", "milk", "cup")),
    (1, ("ice",)),
    (2, ("sweet", "sugar")),
)
_DEFAULT_PRIORITY = 10


@dataclass(frozen=True)
class VariantSegment:
    key: str
    label: str
    value: str


def normalize_dimension_key(raw: str) -> str:
    """Lowercase and collapse non-alphanumeric runs to underscores."""
    normalized = _NON_ALNUM.sub("_", raw.lower()).strip("_")
    return normalized or "option"


def option_summary(option: VariantOption) -> str:
    return option.variant_text or option.name or option.sku_id


def parse_variant_segments(summary: str) -> list[VariantSegment]:
    parts = [part.strip() for part in summary.split("|")]
    segments: list[VariantSegment] = []
    unnamed = 0
    for part in parts:
        if not part:
            continue
        separator = part.find(":")
        if separator > 0:
            label = part[:separator].strip()
            value = part[separator + 1 :].strip()
            fallback = f"Option {len(segments) + 1}"
            segments.append(
                VariantSegment(
                    key=normalize_dimension_key(label or fallback),
                    label=label or fallback,
                    value=value or MISSING_VALUE,
                )
            )
            continue
        unnamed += 1
        label = VARIANT_LABEL if unnamed == 1 else f"{VARIANT_LABEL} {unnamed}"
        segments.append(VariantSegment(key=normalize_dimension_key(label), label=label, value=part))

    if not segments:
        segments.append(
            VariantSegment(key=VARIANT_KEY, label=VARIANT_LABEL, value=summary or MISSING_VALUE)
        )
    return segments


def dimension_priority(dimension: VariantDimension) -> int:
    if dimension.key == VARIANT_KEY:
        return 0
    haystack = f"{dimension.key} {dimension.label}".lower()
    for tier, needles in _PRIORITY_TIERS:
        if any(needle in haystack for needle in needles):
            return tier
    return _DEFAULT_PRIORITY


def order_dimensions(dimensions: list[VariantDimension]) -> list[VariantDimension]:
    # sorted() is stable, so first-seen order survives within a tier
    return sorted(dimensions, key=dimension_priority)


def extract_dimensions(
    options: list[VariantOption],
) -> tuple[list[VariantDimension], list[ParsedOption]]:
    """
    Parse every option's text and return (ordered dimensions, parsed options).

    Each parsed option carries exactly one value per dimension; dimensions an
    option does not mention get "-".
    """
    segmented = [
        (option, summary, parse_variant_segments(summary))
        for option, summary in ((option, option_summary(option)) for option in options)
    ]

    dimensions: list[VariantDimension] = []
    seen_keys: set[str] = set()
    for _, _, segments in segmented:
        for segment in segments:
            if segment.key in seen_keys:
                continue
            seen_keys.add(segment.key)
            dimensions.append(VariantDimension(key=segment.key, label=segment.label))
    if not dimensions:
        dimensions.append(VariantDimension(key=VARIANT_KEY, label=VARIANT_LABEL))

    ordered = order_dimensions(dimensions)

    parsed: list[ParsedOption] = []
    for option, summary, segments in segmented:
        value_by_key: dict[str, str] = {}
        for segment in segments:
            value_by_key.setdefault(segment.key, segment.value)
        parsed.append(
            ParsedOption(
                option=option,
                summary=summary,
                values_by_dimension=[value_by_key.get(d.key, MISSING_VALUE) for d in ordered],
            )
        )
    return ordered, parsed

"""
Combinatorial bounds for variant extraction. Overridable via VARIANT_* env vars.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_COMBO_OPTIONS = 128
DEFAULT_MAX_ATTRIBUTE_COMBINATIONS = 512


def _read_env_int(name: str, default: int) -> int:
    """Read env var as a positive int; return default if unset, invalid or < 1."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class ExtractionLimits:
    max_combo_options: int = DEFAULT_MAX_COMBO_OPTIONS
    max_attribute_combinations: int = DEFAULT_MAX_ATTRIBUTE_COMBINATIONS

    @classmethod
    def from_env(cls) -> "ExtractionLimits":
        """Build limits from VARIANT_* env vars, falling back to defaults."""
        return cls(
            max_combo_options=_read_env_int(
                "VARIANT_MAX_COMBO_OPTIONS", DEFAULT_MAX_COMBO_OPTIONS
            ),
            max_attribute_combinations=_read_env_int(
                "VARIANT_MAX_ATTRIBUTE_COMBINATIONS", DEFAULT_MAX_ATTRIBUTE_COMBINATIONS
            ),
        )

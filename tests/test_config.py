import unittest
from unittest.mock import patch

from backend.config import ExtractionLimits


class TestExtractionLimits(unittest.TestCase):
    def test_defaults(self) -> None:
        limits = ExtractionLimits()

        self.assertEqual(limits.max_combo_options, 128)
        self.assertEqual(limits.max_attribute_combinations, 512)

    def test_limits_are_configurable_via_env(self) -> None:
        with patch.dict(
            "os.environ",
            {
                "VARIANT_MAX_COMBO_OPTIONS": "16",
                "VARIANT_MAX_ATTRIBUTE_COMBINATIONS": "64",
            },
            clear=False,
        ):
            limits = ExtractionLimits.from_env()

        self.assertEqual(limits.max_combo_options, 16)
        self.assertEqual(limits.max_attribute_combinations, 64)

    def test_invalid_env_values_fall_back_to_defaults(self) -> None:
        with patch.dict(
            "os.environ",
            {
                "VARIANT_MAX_COMBO_OPTIONS": "lots",
                "VARIANT_MAX_ATTRIBUTE_COMBINATIONS": "0",
            },
            clear=False,
        ):
            limits = ExtractionLimits.from_env()

        self.assertEqual(limits, ExtractionLimits())

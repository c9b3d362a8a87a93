"""Unit tests for the combo option builder."""

import unittest

from backend.config import ExtractionLimits
from backend.extract.combo_options import (
    build_combo_options,
    build_combo_selections,
    is_combo_unavailable,
    parse_combo_groups,
    pick_primary_sku,
    resolve_combo_price,
)
from models import ComboComponentSelection


def _choices(prefix: str, count: int, **extra) -> list[dict]:
    return [{"skuId": f"{prefix}-{i}", "name": f"{prefix} {i}", **extra} for i in range(1, count + 1)]


def _combo(groups: list[dict], **extra) -> dict:
    detail = {
        "spuType": "combo",
        "name": "Meal",
        "skuList": [{"skuId": "bundle", "salePrice": 30}],
        "comboGroupList": groups,
    }
    detail.update(extra)
    return detail


class TestComboGroups(unittest.TestCase):
    def test_group_parsing_defaults(self) -> None:
        groups = parse_combo_groups(
            {
                "comboGroupList": [
                    {"groupName": "Side", "skuList": _choices("s", 2)},
                    {"name": "Extra", "quantity": 0, "comboSkuList": _choices("e", 1)},
                    {"quantity": "2", "groupType": "MUST", "comboGroupSkuList": []},
                ]
            }
        )

        self.assertEqual([g.name for g in groups], ["Side", "Extra", "Combo"])
        self.assertEqual([g.required for g in groups], [True, False, True])
        self.assertEqual([g.cardinality for g in groups], [1, 1, 2])
        self.assertEqual(len(groups[0].choices), 2)

    def test_required_group_without_sellable_choice_makes_combo_unavailable(self) -> None:
        detail = _combo(
            [
                {"comboGroupName": "Main", "comboSkuList": _choices("m", 2, soldOut=True)},
                {"comboGroupName": "Drink", "comboSkuList": _choices("d", 2)},
            ]
        )
        self.assertTrue(is_combo_unavailable(detail))
        self.assertEqual(build_combo_options(detail), [])

    def test_optional_group_without_sellable_choice_is_skipped(self) -> None:
        detail = _combo(
            [
                {"comboGroupName": "Main", "comboSkuList": _choices("m", 2)},
                {"comboGroupName": "Dessert", "quantity": 0, "comboSkuList": _choices("x", 1, stock=0)},
            ]
        )

        options = build_combo_options(detail)

        self.assertFalse(is_combo_unavailable(detail))
        self.assertEqual([o.variant_text for o in options], ["Main: m 1", "Main: m 2"])

    def test_zero_stock_component_is_unsellable_inside_combo(self) -> None:
        detail = _combo([{"comboGroupName": "Main", "comboSkuList": _choices("m", 1, stock=0)}])
        self.assertTrue(is_combo_unavailable(detail))

    def test_fixed_bundle_requires_every_component(self) -> None:
        detail = {"spuType": "combo", "skuId": "box", "comboSkuList": [{"name": "A"}, {"name": "B", "saleOut": 1}]}
        self.assertTrue(is_combo_unavailable(detail))
        self.assertEqual(build_combo_options(detail), [])

    def test_non_combo_item_is_never_combo_unavailable(self) -> None:
        self.assertFalse(is_combo_unavailable({"skuList": [{"skuId": "1", "soldOut": True}]}))

    def test_combo_structure_without_combo_type_is_not_combo_unavailable(self) -> None:
        detail = {
            "skuList": [{"skuId": "1"}],
            "comboGroupList": [{"comboGroupName": "Main", "comboSkuList": _choices("m", 1, soldOut=True)}],
        }
        self.assertFalse(is_combo_unavailable(detail))


class TestComboSelections(unittest.TestCase):
    def test_two_groups_of_three_cross_multiply_to_nine(self) -> None:
        detail = _combo(
            [
                {"comboGroupName": "Main", "comboSkuList": _choices("m", 3)},
                {"comboGroupName": "Drink", "comboSkuList": _choices("d", 3)},
            ]
        )

        options = build_combo_options(detail)

        self.assertEqual(len(options), 9)
        self.assertEqual(options[0].variant_text, "Main: m 1 | Drink: d 1")
        self.assertEqual(options[1].variant_text, "Main: m 1 | Drink: d 2")
        self.assertEqual(options[-1].variant_text, "Main: m 3 | Drink: d 3")
        self.assertTrue(all(o.sku_id == "bundle" for o in options))
        self.assertTrue(all(o.name == "Meal" for o in options))

    def test_cardinality_above_one_takes_first_sellable_choices(self) -> None:
        choices = _choices("s", 4)
        choices[0]["soldOut"] = True
        detail = _combo(
            [
                {"comboGroupName": "Main", "comboSkuList": _choices("m", 2)},
                {"comboGroupName": "Sides", "quantity": 2, "comboSkuList": choices},
            ]
        )

        options = build_combo_options(detail)

        self.assertEqual(
            [o.variant_text for o in options],
            [
                "Main: m 1 | Sides: s 2 | Sides: s 3",
                "Main: m 2 | Sides: s 2 | Sides: s 3",
            ],
        )

    def test_cardinality_larger_than_sellable_choices_fails_required_group(self) -> None:
        detail = _combo([{"comboGroupName": "Sides", "quantity": 3, "comboSkuList": _choices("s", 2)}])
        self.assertEqual(build_combo_selections(detail, 128), [])

    def test_walk_stops_at_the_combo_limit(self) -> None:
        detail = _combo(
            [
                {"comboGroupName": "A", "comboSkuList": _choices("a", 10)},
                {"comboGroupName": "B", "comboSkuList": _choices("b", 10)},
                {"comboGroupName": "C", "comboSkuList": _choices("c", 10)},
            ]
        )

        selections = build_combo_selections(detail, 128)
        options = build_combo_options(detail)
        small = build_combo_options(detail, limits=ExtractionLimits(max_combo_options=5))

        self.assertEqual(len(selections), 128)
        self.assertEqual(len(options), 128)
        self.assertEqual(len(small), 5)
        self.assertEqual(options[0].variant_text, "A: a 1 | B: b 1 | C: c 1")

    def test_fixed_bundle_single_selection_with_quantities(self) -> None:
        detail = {
            "spuType": "combo",
            "name": "Family Box",
            "skuId": "box",
            "price": 88,
            "comboSkuList": [{"name": "Fries", "num": 2}, {"skuName": "Nuggets"}],
        }

        options = build_combo_options(detail)

        self.assertEqual(len(options), 1)
        self.assertEqual(options[0].sku_id, "box")
        self.assertEqual(options[0].variant_text, "Bundle: Fries x2 | Bundle: Nuggets")
        self.assertEqual(options[0].price, 88.0)


class TestComboOptionDetails(unittest.TestCase):
    def test_primary_component_contributes_variant_segment_and_pairs(self) -> None:
        detail = _combo(
            [
                {"comboGroupName": "Main", "comboSkuList": [{"name": "Burger"}]},
                {
                    "comboGroupName": "Drink",
                    "comboSkuList": [
                        {
                            "name": "Tea",
                            "specList": [{"specId": "cup", "specOptionId": "l", "specOptionName": "Large"}],
                            "attributeList": [{"attributeOptionId": "hot"}],
                        }
                    ],
                },
            ]
        )

        option = build_combo_options(detail)[0]

        self.assertEqual(option.variant_text, "Main: Burger | Drink: Tea | Variant: Large")
        self.assertEqual(option.spec_key(), "cup:l")
        self.assertEqual(option.attribute_key(), "hot")

    def test_primary_component_attribute_groups_are_expanded(self) -> None:
        detail = _combo(
            [
                {
                    "comboGroupName": "Drink",
                    "comboSkuList": [
                        {
                            "name": "Tea",
                            "spuAttributeList": [
                                {
                                    "name": "Ice",
                                    "items": [
                                        {"attributeOptionId": "i1", "name": "Less"},
                                        {"attributeOptionId": "i2", "name": "Regular", "defaulted": True},
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ]
        )

        options = build_combo_options(detail)

        self.assertEqual(
            [o.variant_text for o in options],
            ["Drink: Tea | Ice: Regular", "Drink: Tea | Ice: Less"],
        )

    def test_bundle_sku_prefers_sellable_primary_sku(self) -> None:
        detail = _combo(
            [{"comboGroupName": "Main", "comboSkuList": _choices("m", 1)}],
            skuList=[{"skuId": "old", "stock": 0}, {"skuId": "new", "stock": 4, "price": 12}],
        )

        option = build_combo_options(detail)[0]

        self.assertEqual(option.sku_id, "new")
        self.assertEqual(option.price, 12.0)

    def test_primary_sku_skips_zero_stock_on_stock_limited_item(self) -> None:
        detail = {"stockLimit": True, "skuList": [{"skuId": "old", "stock": 0}, {"skuId": "new"}]}
        self.assertEqual(pick_primary_sku(detail)["skuId"], "new")

    def test_combo_typed_item_with_only_unsellable_skus_yields_nothing(self) -> None:
        detail = _combo(
            [{"comboGroupName": "Main", "comboSkuList": _choices("m", 1)}],
            skuList=[{"skuId": "bundle", "stock": 0}],
        )
        self.assertEqual(build_combo_options(detail), [])

    def test_missing_bundle_sku_id_yields_nothing(self) -> None:
        detail = {"spuType": "combo", "comboGroupList": [{"comboSkuList": _choices("m", 1)}]}
        self.assertEqual(build_combo_options(detail), [])


class TestComboPrice(unittest.TestCase):
    @staticmethod
    def _selection(*prices) -> list[ComboComponentSelection]:
        return [
            ComboComponentSelection(
                group_name="G",
                component={} if price is None else {"comboPrice": price},
            )
            for price in prices
        ]

    def test_sum_of_declared_combo_prices(self) -> None:
        self.assertEqual(resolve_combo_price(self._selection(10, None, "5.5"), 30.0), 15.5)

    def test_zero_sum_falls_back_to_base_price(self) -> None:
        self.assertEqual(resolve_combo_price(self._selection(0, 0), 30.0), 30.0)

    def test_zero_sum_kept_without_base_price(self) -> None:
        self.assertEqual(resolve_combo_price(self._selection(0), None), 0.0)

    def test_no_combo_prices_uses_base_price(self) -> None:
        self.assertEqual(resolve_combo_price(self._selection(None, None), 30.0), 30.0)

import unittest

from fastbuy.models.catalog import Upsale, ValueOverride
from fastbuy.services.upsale_service import group_upsales, label_for, offered_upsale_ids
from sample_data import UPSALES


class TestGroupUpsales(unittest.TestCase):
    def test_groups_relevant_upsales_by_condition(self):
        groups = group_upsales(UPSALES, "ct-mt5-1p-2k")
        self.assertEqual(list(groups), ["profitTarget", "tradingNews", "weekendTradingAllowed"])
        self.assertEqual(groups["profitTarget"]["label"], "Get Additional Profit Target")

        texts = [o["text"] for o in groups["profitTarget"]["options"]]
        self.assertEqual(texts, ["Select", "Another target (+$5.5)", "Profit Target (+$15)"])

    def test_every_group_starts_with_sentinel(self):
        groups = group_upsales(UPSALES, "ct-mt5-1p-2k")
        for group in groups.values():
            self.assertEqual(group["options"][0], {"id": "", "text": "Select"})
            self.assertGreaterEqual(len(group["options"]), 2)

    def test_value_override_makes_upsale_relevant(self):
        groups = group_upsales(UPSALES, "ct-mt5-1p-2k")
        option = groups["weekendTradingAllowed"]["options"][1]
        self.assertEqual(option, {"id": "u3", "text": "Weekend = true (+$20)"})

    def test_price_keeps_two_decimals(self):
        groups = group_upsales(UPSALES, "ct-mt5-1p-2k")
        self.assertEqual(groups["tradingNews"]["options"][1]["text"], "News Trading (+$10.01)")

    def test_duplicates_keep_first(self):
        upsales = [
            Upsale(id="first", product_id="p", title="Min Days", condition_key="minimumDaysWithTradingHistory", price=9),
            Upsale(id="second", product_id="p", title="min days ", condition_key="minimumDaysWithTradingHistory", price=9),
        ]
        groups = group_upsales(upsales, "p")
        options = groups["minimumDaysWithTradingHistory"]["options"]
        self.assertEqual(len(options), 2)
        self.assertEqual(options[1]["id"], "first")

    def test_different_override_values_are_not_duplicates(self):
        upsales = [
            Upsale(id="a", product_id="x", title="Target", condition_key="profitTarget", price=9,
                   value_overrides=[ValueOverride(value=8, product_id="p")]),
            Upsale(id="b", product_id="y", title="Target", condition_key="profitTarget", price=9,
                   value_overrides=[ValueOverride(value=6.0, product_id="p")]),
        ]
        options = group_upsales(upsales, "p")["profitTarget"]["options"]
        self.assertEqual([o["text"] for o in options], ["Select", "Target = 6 (+$9)", "Target = 8 (+$9)"])

    def test_blank_title_falls_back_to_label(self):
        upsales = [Upsale(id="n", product_id="p", title="  ", condition_key="tradingNews")]
        options = group_upsales(upsales, "p")["tradingNews"]["options"]
        self.assertEqual(options[1]["text"], "Get Subscription for Trading News")

    def test_unknown_condition_uses_raw_key(self):
        self.assertEqual(label_for("swapFree"), "swapFree")

    def test_empty_when_nothing_relevant(self):
        self.assertEqual(group_upsales(UPSALES, ""), {})
        self.assertEqual(group_upsales(UPSALES, "ct-none"), {})
        self.assertEqual(group_upsales([], "ct-mt5-1p-2k"), {})

    def test_offered_ids(self):
        groups = group_upsales(UPSALES, "ct-mt5-1p-2k")
        self.assertEqual(offered_upsale_ids(groups), {"u1", "u2", "u3", "u5"})


if __name__ == '__main__':
    unittest.main()

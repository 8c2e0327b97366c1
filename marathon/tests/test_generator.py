import unittest
from decimal import Decimal

from marathon.domain.Plan import Plan
from marathon.domain.errors import InvalidParameter
from marathon.domain.money import multiply, compound
from marathon.logic.progression.generator import (
    generate_entries, recalculate_from_day, wager_for_day,
)


def make_plan(start="100", odds="1.5", days=3):
    return Plan(id="plan-1", user_id="user-1", name="Test plan",
                start_wager=Decimal(start), odds=Decimal(odds), days=days)


class TestGenerateEntries(unittest.TestCase):

    def test_three_day_example(self):
        entries = generate_entries(make_plan())
        self.assertEqual([e.day for e in entries], [1, 2, 3])
        self.assertEqual([e.wager for e in entries], [Decimal("100"), Decimal("150"), Decimal("225")])
        self.assertEqual([e.winnings for e in entries], [Decimal("150"), Decimal("225"), Decimal("337.5")])
        self.assertTrue(all(e.result == "pending" for e in entries))
        self.assertTrue(all(e.id is None and e.plan_id == "plan-1" for e in entries))
        self.assertTrue(all(e.odds == Decimal("1.5") for e in entries))

    def test_single_day_plan(self):
        entries = generate_entries(make_plan(start="10", odds="2", days=1))
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].wager, Decimal("10"))
        self.assertEqual(entries[0].winnings, Decimal("20"))

    def test_compound_chain_over_full_year(self):
        plan = make_plan(start="1234.56", odds="1.37", days=365)
        entries = generate_entries(plan)
        self.assertEqual(len(entries), 365)
        self.assertEqual([e.day for e in entries], list(range(1, 366)))
        for entry in entries:
            self.assertEqual(entry.winnings, multiply(entry.wager, entry.odds))
        for prev, nxt in zip(entries, entries[1:]):
            self.assertEqual(nxt.wager, prev.winnings)

    def test_closed_form(self):
        plan = make_plan(start="250.75", odds="2.05", days=120)
        for k, entry in enumerate(generate_entries(plan)):
            self.assertEqual(entry.wager, compound(plan.start_wager, plan.odds, k))
        self.assertEqual(generate_entries(plan)[-1].winnings,
                         plan.potential_final)

    def test_no_float_drift(self):
        entries = generate_entries(make_plan(start="1", odds="1.1", days=10))
        # 1.1 ** 10 exactly
        self.assertEqual(entries[-1].winnings, Decimal("2.5937424601"))

    def test_invalid_parameters_rejected(self):
        for start, odds, days in [("100", "1", 3), ("100", "0.95", 3), ("0.5", "1.5", 3),
                                  ("0", "1.5", 3), ("100", "1.5", 0), ("100", "1.5", 366),
                                  ("100.123", "1.5", 3), ("100", "1.555", 3), ("100", "100", 3),
                                  ("12345678901", "1.5", 3)]:
            with self.subTest(start=start, odds=odds, days=days):
                with self.assertRaises(InvalidParameter):
                    generate_entries(make_plan(start=start, odds=odds, days=days))

    def test_boundaries_accepted(self):
        self.assertEqual(len(generate_entries(make_plan(start="1", odds="1.01", days=365))), 365)
        self.assertEqual(len(generate_entries(make_plan(start="9999999999.99", odds="99.99", days=1))), 1)
        self.assertEqual(len(generate_entries(make_plan(start="100.50", odds="2.50", days=2))), 2)


class TestRecalculateFromDay(unittest.TestCase):

    def test_from_day_one_matches_generation(self):
        plan = make_plan(start="100", odds="1.85", days=30)
        self.assertEqual(recalculate_from_day(plan, 1), generate_entries(plan))

    def test_restart_wager_ignores_history(self):
        plan = make_plan()
        entries = recalculate_from_day(plan, 2)
        self.assertEqual([e.day for e in entries], [2, 3])
        self.assertEqual(entries[0].wager, Decimal("150"))
        self.assertEqual(entries[0].winnings, Decimal("225"))
        self.assertEqual(entries[1].winnings, Decimal("337.5"))
        self.assertTrue(all(e.result == "pending" for e in entries))

    def test_first_wager_closed_form(self):
        plan = make_plan(start="40", odds="3.25", days=50)
        for d in (1, 2, 17, 49, 50):
            with self.subTest(day=d):
                entries = recalculate_from_day(plan, d)
                self.assertEqual(len(entries), plan.days - d + 1)
                self.assertEqual(entries[0].wager, compound(plan.start_wager, plan.odds, d - 1))
                self.assertEqual(entries[0].wager, wager_for_day(plan, d))

    def test_suffix_equals_generated_suffix(self):
        plan = make_plan(start="99.99", odds="1.42", days=40)
        self.assertEqual(recalculate_from_day(plan, 11), generate_entries(plan)[10:])

    def test_last_day_only(self):
        entries = recalculate_from_day(make_plan(), 3)
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].wager, Decimal("225"))

    def test_out_of_range_day_rejected(self):
        plan = make_plan()
        for bad in (0, -1, 4):
            with self.subTest(day=bad):
                with self.assertRaises(InvalidParameter):
                    recalculate_from_day(plan, bad)


if __name__ == '__main__':
    unittest.main()

import unittest
from decimal import Decimal

from marathon.domain.Plan import Plan
from marathon.logic.progression.generator import generate_entries
from marathon.logic.reporting.statistics import calculate_plan_stats, summarize_plans, stats_to_api


def make_plan(days=3, status="active", start="100", odds="1.5"):
    return Plan(id="p", user_id="u", name="Stats", start_wager=Decimal(start),
                odds=Decimal(odds), days=days, status=status)


class TestPlanStats(unittest.TestCase):

    def test_fresh_plan(self):
        plan = make_plan()
        stats = calculate_plan_stats(plan, generate_entries(plan))
        self.assertEqual(stats['current_day'], 1)
        self.assertEqual(stats['progress_percentage'], 0)
        self.assertEqual(stats['current_wager'], Decimal("100"))
        self.assertEqual(stats['potential_final'], Decimal("337.5"))
        self.assertEqual(stats['win_rate'], 0)
        self.assertEqual(stats['completed_days'], 0)
        self.assertEqual(stats['total_days'], 3)

    def test_partial_progress(self):
        plan = make_plan()
        entries = generate_entries(plan)
        entries[0].result = "win"
        entries[1].result = "loss"
        stats = calculate_plan_stats(plan, entries)
        self.assertEqual(stats['current_day'], 3)
        self.assertEqual(stats['progress_percentage'], 67)
        self.assertEqual(stats['current_wager'], Decimal("225"))
        self.assertEqual(stats['win_rate'], 50)

    def test_all_days_completed(self):
        plan = make_plan()
        entries = generate_entries(plan)
        for e in entries:
            e.result = "win"
        stats = calculate_plan_stats(plan, entries)
        self.assertEqual(stats['progress_percentage'], 100)
        self.assertEqual(stats['current_day'], 4)
        self.assertEqual(stats['current_wager'], Decimal(0))
        self.assertEqual(stats['win_rate'], 100)

    def test_rounds_half_up(self):
        plan = make_plan(days=8)
        entries = generate_entries(plan)
        entries[0].result = "win"
        self.assertEqual(calculate_plan_stats(plan, entries)['progress_percentage'], 13)

    def test_no_entries(self):
        stats = calculate_plan_stats(make_plan(), [])
        self.assertEqual(stats['potential_final'], Decimal(0))
        self.assertEqual(stats['current_wager'], Decimal(0))
        self.assertEqual(stats['win_rate'], 0)

    def test_api_view(self):
        plan = make_plan()
        api = stats_to_api(calculate_plan_stats(plan, generate_entries(plan)))
        self.assertEqual(api['currentDay'], 1)
        self.assertEqual(api['progressPercentage'], 0)
        self.assertEqual(Decimal(api['potentialFinal']), Decimal("337.5"))
        self.assertIsInstance(api['currentWager'], str)


class TestSummarizePlans(unittest.TestCase):

    def test_empty(self):
        summary = summarize_plans([])
        self.assertEqual(summary['total_plans'], 0)
        self.assertEqual(summary['win_rate'], 0)
        self.assertEqual(summary['total_investment'], Decimal(0))

    def test_mixed_statuses(self):
        plans = [
            make_plan(status="active"),
            make_plan(status="completed", start="50"),
            make_plan(status="stopped", start="20", odds="2", days=10),
            make_plan(status="completed", start="30"),
        ]
        summary = summarize_plans(plans)
        self.assertEqual(summary['total_plans'], 4)
        self.assertEqual(summary['active_plans'], 1)
        self.assertEqual(summary['stopped_plans'], 1)
        self.assertEqual(summary['completed_plans'], 2)
        self.assertEqual(summary['total_investment'], Decimal("200"))
        # only active plans count toward potential winnings
        self.assertEqual(summary['potential_winnings'], Decimal("337.5"))
        self.assertEqual(summary['win_rate'], 50)


if __name__ == '__main__':
    unittest.main()

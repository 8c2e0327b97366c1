import unittest
from decimal import Decimal

from marathon.domain.Plan import Plan
from marathon.domain.errors import InvalidParameter
from marathon.logic.progression.generator import generate_entries
from marathon.logic.progression.status import (
    check_result_update, status_after_result, status_after_restart, count_wins,
)


class TestPlanStatusMachine(unittest.TestCase):

    def setUp(self):
        self.plan = Plan(id="p", user_id="u", name="Status", start_wager=Decimal("100"),
                         odds=Decimal("1.5"), days=3)
        self.entries = generate_entries(self.plan)

    def _record(self, day, result):
        self.entries[day - 1].result = result
        return status_after_result("active", result, self.entries, self.plan.days)

    def test_loss_always_stops(self):
        for day in (1, 2, 3):
            with self.subTest(day=day):
                self.setUp()
                self.assertEqual(self._record(day, "loss"), "stopped")

    def test_win_before_last_keeps_status(self):
        self.assertEqual(self._record(1, "win"), "active")
        self.assertEqual(self._record(2, "win"), "active")

    def test_final_win_completes(self):
        self._record(1, "win")
        self._record(2, "win")
        self.assertEqual(self._record(3, "win"), "completed")
        self.assertEqual(count_wins(self.entries), 3)

    def test_win_after_loss_does_not_complete(self):
        self._record(1, "loss")
        self.entries[1].result = "win"
        self.assertEqual(status_after_result("stopped", "win", self.entries, 3), "stopped")

    def test_single_day_win_completes(self):
        plan = Plan(id="p1", user_id="u", name="One", start_wager=Decimal("5"),
                    odds=Decimal("2"), days=1)
        entries = generate_entries(plan)
        entries[0].result = "win"
        self.assertEqual(status_after_result("active", "win", entries, 1), "completed")

    def test_restart_transitions(self):
        self.assertEqual(status_after_restart("stopped"), "active")
        self.assertEqual(status_after_restart("active"), "active")
        self.assertEqual(status_after_restart("completed"), "completed")

    def test_result_update_checks(self):
        entry = self.entries[0]
        check_result_update(entry, "win")
        check_result_update(entry, "loss")
        with self.assertRaises(InvalidParameter):
            check_result_update(entry, "pending")
        with self.assertRaises(InvalidParameter):
            check_result_update(entry, "draw")

    def test_recorded_day_cannot_change(self):
        entry = self.entries[0]
        entry.result = "loss"
        with self.assertRaises(InvalidParameter):
            check_result_update(entry, "win")
        entry.result = "win"
        with self.assertRaises(InvalidParameter):
            check_result_update(entry, "loss")


if __name__ == '__main__':
    unittest.main()

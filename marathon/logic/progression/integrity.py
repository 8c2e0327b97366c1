from typing import Optional, Sequence

from marathon.domain.DayEntry import DayEntry
from marathon.domain.Plan import Plan
from marathon.domain.errors import InconsistentState


def check_entry_sequence(plan: Plan, entries: Sequence[DayEntry], last_day: Optional[int] = None) -> None:
    """Entries must be exactly days 1..last_day (default plan.days), ascending, one per day."""
    if last_day is None:
        last_day = plan.days
    if len(entries) != last_day:
        raise InconsistentState(
            f"Plan {plan.id} has {len(entries)} day entries up to day {last_day}, expected {last_day}"
        )
    for expected_day, entry in enumerate(entries, start=1):
        if entry.plan_id != plan.id:
            raise InconsistentState(f"Day entry {entry.id} does not belong to plan {plan.id}")
        if entry.day != expected_day:
            raise InconsistentState(
                f"Plan {plan.id} day entries are not contiguous: found day {entry.day} "
                f"where day {expected_day} was expected"
            )

"""Read-only plan metrics.

Nothing here is persisted; values are recomputed from the plan and its day
entries on every read.
"""
from decimal import Decimal
from typing import Dict, Any, List, Sequence

from marathon.domain.DayEntry import DayEntry
from marathon.domain.Plan import Plan
from marathon.domain.money import ZERO, percentage, total
from marathon.utilities.constants import (
    PLAN_ACTIVE, PLAN_STOPPED, PLAN_COMPLETED, RESULT_PENDING, RESULT_WIN,
)


def calculate_plan_stats(plan: Plan, entries: Sequence[DayEntry]) -> Dict[str, Any]:
    """Progress metrics for a single plan.

    Returns structure:
    {
      'current_day': int,            # next actionable day, days + 1 once finished
      'progress_percentage': int,
      'current_wager': Decimal,      # 0 when no entry matches current_day
      'potential_final': Decimal,    # winnings of the last entry, 0 without entries
      'win_rate': int,               # wins / completed days, 0 when nothing completed
      'completed_days': int,
      'total_days': int,
    }
    """
    completed = [e for e in entries if e.result != RESULT_PENDING]
    winning = [e for e in entries if e.result == RESULT_WIN]
    current_day = len(completed) + 1

    current_entry = next((e for e in entries if e.day == current_day), None)
    current_wager = current_entry.wager if current_entry else ZERO

    ordered = sorted(entries, key=lambda e: e.day)
    potential_final = ordered[-1].winnings if ordered else ZERO

    return {
        'current_day': current_day,
        'progress_percentage': percentage(len(completed), plan.days),
        'current_wager': current_wager,
        'potential_final': potential_final,
        'win_rate': percentage(len(winning), len(completed)),
        'completed_days': len(completed),
        'total_days': plan.days,
    }


def summarize_plans(plans: List[Plan]) -> Dict[str, Any]:
    """Dashboard totals across all plans of one user."""
    active = [p for p in plans if p.status == PLAN_ACTIVE]
    stopped = [p for p in plans if p.status == PLAN_STOPPED]
    completed = [p for p in plans if p.status == PLAN_COMPLETED]

    total_investment = total(p.start_wager for p in plans)
    potential_winnings = total(p.potential_final for p in active)

    return {
        'total_plans': len(plans),
        'active_plans': len(active),
        'stopped_plans': len(stopped),
        'completed_plans': len(completed),
        'total_investment': total_investment,
        'potential_winnings': potential_winnings,
        'win_rate': percentage(len(completed), len(plans)),
    }


def stats_to_api(stats: Dict[str, Any]) -> Dict[str, Any]:
    """camelCase, JSON-safe view of calculate_plan_stats / summarize_plans output."""
    out = {}
    for key, value in stats.items():
        head, *rest = key.split('_')
        camel = head + ''.join(part.capitalize() for part in rest)
        out[camel] = format(value, 'f') if isinstance(value, Decimal) else value
    return out


__all__ = ["calculate_plan_stats", "summarize_plans", "stats_to_api"]

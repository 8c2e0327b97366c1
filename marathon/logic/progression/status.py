"""Plan status machine.

    active --loss--> stopped --restart--> active
    active --last win--> completed (terminal)

Functions here only decide; persisting the outcome is the caller's job.
"""
from typing import Iterable

from marathon.domain.DayEntry import DayEntry
from marathon.domain.errors import InvalidParameter
from marathon.utilities.constants import (
    PLAN_ACTIVE, PLAN_STOPPED, PLAN_COMPLETED,
    RESULT_WIN, RESULT_LOSS, RECORDABLE_RESULTS,
)


def check_result_update(entry: DayEntry, result: str) -> None:
    """A day moves once from pending to win or loss; anything else is rejected."""
    if result not in RECORDABLE_RESULTS:
        raise InvalidParameter("Result must be 'win' or 'loss'")
    if not entry.is_pending:
        raise InvalidParameter(f"Day {entry.day} is already recorded as {entry.result}")


def count_wins(entries: Iterable[DayEntry]) -> int:
    return sum(1 for e in entries if e.result == RESULT_WIN)


def status_after_result(status: str, result: str, entries: Iterable[DayEntry], days: int) -> str:
    """Status once `result` has been applied; `entries` already include it."""
    if result == RESULT_LOSS:
        return PLAN_STOPPED
    if result == RESULT_WIN and count_wins(entries) == days:
        return PLAN_COMPLETED
    return status


def status_after_restart(status: str) -> str:
    if status == PLAN_STOPPED:
        return PLAN_ACTIVE
    return status


__all__ = ["check_result_update", "count_wins", "status_after_result", "status_after_restart"]

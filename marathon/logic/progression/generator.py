"""Progression generator and recalculation engine.

A plan's day entries form a pure geometric progression:

    wager(day)    = start_wager * odds ** (day - 1)
    winnings(day) = wager(day) * odds
    wager(day+1)  = winnings(day)

Both entry points compound with the same exact decimal multiplication, so a
restart from day 1 reproduces the initial generation bit for bit.
"""
from decimal import Decimal
from typing import List

from marathon.domain.DayEntry import DayEntry
from marathon.domain.Plan import Plan
from marathon.domain.errors import InvalidParameter
from marathon.domain.money import multiply, compound
from marathon.utilities.constants import MIN_DAYS, MAX_DAYS, MIN_START_WAGER, RESULT_PENDING


def _fits_column(value: Decimal, max_digits: int, places: int) -> bool:
    # value >= 1 here, so adjusted() + 1 is its count of integer digits
    _, digits, exponent = value.as_tuple()
    while exponent < 0 and digits and digits[-1] == 0:
        digits, exponent = digits[:-1], exponent + 1
    decimals = max(0, -exponent)
    return decimals <= places and value.adjusted() + 1 + places <= max_digits


def validate_plan_parameters(start_wager: Decimal, odds: Decimal, days: int) -> None:
    """Raise InvalidParameter unless start_wager >= 1, odds > 1 and 1 <= days <= 365."""
    if not isinstance(start_wager, Decimal) or not start_wager.is_finite():
        raise InvalidParameter("Start wager must be a decimal number")
    if not isinstance(odds, Decimal) or not odds.is_finite():
        raise InvalidParameter("Odds must be a decimal number")
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidParameter("Duration must be a whole number of days")
    if start_wager < MIN_START_WAGER:
        raise InvalidParameter(f"Start wager must be at least {MIN_START_WAGER}")
    if odds <= 1:
        raise InvalidParameter("Odds must be greater than 1")
    if not _fits_column(start_wager, 12, 2):
        raise InvalidParameter("Start wager allows at most 12 digits with 2 decimal places")
    if not _fits_column(odds, 4, 2):
        raise InvalidParameter("Odds allow at most 4 digits with 2 decimal places")
    if days < MIN_DAYS:
        raise InvalidParameter(f"Duration must be at least {MIN_DAYS} day")
    if days > MAX_DAYS:
        raise InvalidParameter(f"Duration cannot exceed {MAX_DAYS} days")


def validate_from_day(plan: Plan, from_day: int) -> None:
    if isinstance(from_day, bool) or not isinstance(from_day, int):
        raise InvalidParameter("Restart day must be a whole number")
    if from_day < 1 or from_day > plan.days:
        raise InvalidParameter(f"Restart day must be between 1 and {plan.days}")


def wager_for_day(plan: Plan, day: int) -> Decimal:
    return compound(plan.start_wager, plan.odds, day - 1)


def _emit(plan: Plan, first_day: int, current_wager: Decimal) -> List[DayEntry]:
    entries = []
    for day in range(first_day, plan.days + 1):
        winnings = multiply(current_wager, plan.odds)
        entries.append(DayEntry(
            plan_id=plan.id,
            day=day,
            wager=current_wager,
            odds=plan.odds,
            winnings=winnings,
            result=RESULT_PENDING,
        ))
        current_wager = winnings
    return entries


def generate_entries(plan: Plan) -> List[DayEntry]:
    """Build the full day 1..plan.days progression, every entry pending."""
    validate_plan_parameters(plan.start_wager, plan.odds, plan.days)
    return _emit(plan, 1, plan.start_wager)


def recalculate_from_day(plan: Plan, from_day: int) -> List[DayEntry]:
    """Regenerate entries for days from_day..plan.days.

    The wager on from_day is replayed from start_wager and odds alone; results
    recorded before the restart day do not influence it. Deleting the old
    suffix and keeping days before from_day is left to the caller.
    """
    validate_plan_parameters(plan.start_wager, plan.odds, plan.days)
    validate_from_day(plan, from_day)
    current_wager = plan.start_wager
    for _ in range(1, from_day):
        current_wager = multiply(current_wager, plan.odds)
    return _emit(plan, from_day, current_wager)


__all__ = [
    "validate_plan_parameters", "validate_from_day", "wager_for_day",
    "generate_entries", "recalculate_from_day",
]

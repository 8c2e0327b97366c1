"""Plan lifecycle operations: create, record a day result, restart, read, delete.

Every function takes the repository explicitly together with the signed-in
Principal. Mutations of one plan run under `repo.locked(plan_id)`, so the
entry set a status decision is based on cannot change underneath it. Writes
that touch more than one record go through single repository calls, so a
failed write leaves the previous state in place.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from marathon.domain.DayEntry import DayEntry
from marathon.domain.Plan import Plan
from marathon.domain.User import Principal
from marathon.domain.errors import AccessDenied, InvalidParameter, NotFound
from marathon.events.event_helpers import (
    publish_plan_created, publish_plan_stopped, publish_plan_completed, publish_plan_restarted,
)
from marathon.infra.Plan_Repository import PlanRepository
from marathon.logic.progression.generator import (
    generate_entries, recalculate_from_day, validate_plan_parameters,
)
from marathon.logic.progression.integrity import check_entry_sequence
from marathon.logic.progression.status import (
    check_result_update, status_after_result, status_after_restart,
)
from marathon.logic.reporting.statistics import calculate_plan_stats
from marathon.utilities.constants import (
    PLAN_STOPPED, PLAN_COMPLETED, MAX_PLAN_NAME_LENGTH,
)

logger = logging.getLogger(__name__)


def _load_owned_plan(repo: PlanRepository, principal: Principal, plan_id: str) -> Plan:
    plan = repo.get_plan(plan_id)
    if plan is None:
        raise NotFound("Plan not found")
    if plan.user_id != principal.id:
        raise AccessDenied("Access denied")
    return plan


def _load_entries(repo: PlanRepository, plan: Plan) -> List[DayEntry]:
    entries = repo.get_day_entries(plan.id)
    check_entry_sequence(plan, entries)
    return entries


def create_plan(repo: PlanRepository, principal: Principal, name: str, start_wager: Decimal,
                odds: Decimal, days: int) -> Tuple[Plan, List[DayEntry]]:
    name = (name or "").strip()
    if not name:
        raise InvalidParameter("Plan name is required")
    if len(name) > MAX_PLAN_NAME_LENGTH:
        raise InvalidParameter(f"Plan name cannot exceed {MAX_PLAN_NAME_LENGTH} characters")
    validate_plan_parameters(start_wager, odds, days)

    plan, entries = repo.create_plan_with_entries(principal.id, name, start_wager, odds, days,
                                                  generate_entries)
    logger.info("Plan %s created by user %s: %s x %s for %s days",
                plan.id, principal.id, plan.start_wager, plan.odds, plan.days)
    publish_plan_created(plan)
    return plan, entries


def list_plans(repo: PlanRepository, principal: Principal) -> List[Plan]:
    return repo.get_plans_by_user(principal.id)


def get_plan_detail(repo: PlanRepository, principal: Principal,
                    plan_id: str) -> Tuple[Plan, List[DayEntry], Dict[str, Any]]:
    with repo.locked(plan_id):
        plan = _load_owned_plan(repo, principal, plan_id)
        entries = _load_entries(repo, plan)
    return plan, entries, calculate_plan_stats(plan, entries)


def delete_plan(repo: PlanRepository, principal: Principal, plan_id: str) -> None:
    with repo.locked(plan_id):
        _load_owned_plan(repo, principal, plan_id)
        repo.delete_plan(plan_id)
    logger.info("Plan %s deleted by user %s", plan_id, principal.id)


def update_day_result(repo: PlanRepository, principal: Principal, plan_id: str, day: int,
                      result: str) -> Tuple[Plan, DayEntry]:
    """Record a day's outcome and apply the resulting status transition."""
    with repo.locked(plan_id):
        plan = _load_owned_plan(repo, principal, plan_id)
        entries = _load_entries(repo, plan)
        entry = next((e for e in entries if e.day == day), None)
        if entry is None:
            raise NotFound(f"Day {day} not found")
        check_result_update(entry, result)

        repo.update_day_result(plan_id, day, result)
        entry.result = result

        new_status = status_after_result(plan.status, result, entries, plan.days)
        if new_status != plan.status:
            repo.update_plan_status(plan_id, new_status)
            logger.info("Plan %s: day %s %s, status %s -> %s",
                        plan_id, day, result, plan.status, new_status)
            plan.status = new_status
            if new_status == PLAN_STOPPED:
                publish_plan_stopped(plan, day)
            elif new_status == PLAN_COMPLETED:
                publish_plan_completed(plan, day)
    return plan, entry


def restart_plan(repo: PlanRepository, principal: Principal, plan_id: str,
                 from_day: int) -> Tuple[Plan, List[DayEntry]]:
    """Regenerate days from_day..end from the plan's parameters; reactivate a stopped plan."""
    with repo.locked(plan_id):
        plan = _load_owned_plan(repo, principal, plan_id)
        new_entries = recalculate_from_day(plan, from_day)
        kept = [e for e in repo.get_day_entries(plan_id) if e.day < from_day]
        check_entry_sequence(plan, kept, last_day=from_day - 1)

        deleted, _ = repo.replace_day_entries_from_day(plan_id, from_day, new_entries)

        new_status = status_after_restart(plan.status)
        reactivated = new_status != plan.status
        if reactivated:
            repo.update_plan_status(plan_id, new_status)
            plan.status = new_status
        entries = _load_entries(repo, plan)
    logger.info("Plan %s restarted from day %s (%s entries replaced, reactivated=%s)",
                plan_id, from_day, deleted, reactivated)
    publish_plan_restarted(plan, from_day, reactivated)
    return plan, entries


__all__ = [
    "create_plan", "list_plans", "get_plan_detail", "delete_plan",
    "update_day_result", "restart_plan",
]

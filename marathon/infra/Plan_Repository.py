import logging
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple
from uuid import uuid4

from marathon.domain.DayEntry import DayEntry
from marathon.domain.Plan import Plan
from marathon.infra.json_store import IO_LOCK, load_json, atomic_write
from marathon.infra.paths import DATA_DIR, PLANS_FILENAME, DAY_ENTRIES_FILENAME, data_file
from marathon.utilities.constants import PLAN_ACTIVE, PLAN_STATUSES

logger = logging.getLogger(__name__)


class PlanRepository:
    """JSON-file storage for plans and their day entries.

    plans.json holds a list of plan records; day_entries.json maps a plan id
    to its list of entry records. Decimal fields are stored as plain strings.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir or DATA_DIR)
        self.plans_file = data_file(self.data_dir, PLANS_FILENAME)
        self.entries_file = data_file(self.data_dir, DAY_ENTRIES_FILENAME)
        self._locks: Dict[str, RLock] = {}
        self._locks_guard = Lock()

    # -------------------- Per-plan serialization --------------------
    @contextmanager
    def locked(self, plan_id: str) -> Iterator[None]:
        """Hold the plan's lock for a read-check-write sequence.

        Locks exist only for stored plans and are dropped by delete_plan. An
        unknown id gets no lock; there is nothing to serialize for it.
        """
        with self._locks_guard:
            lock = self._locks.get(plan_id)
            if lock is None and self.get_plan(plan_id) is not None:
                lock = self._locks[plan_id] = RLock()
        if lock is None:
            yield
            return
        with lock:
            yield

    # -------------------- Raw file access --------------------
    def _read_plans(self) -> List[dict]:
        return load_json(self.plans_file, [])

    def _read_entries(self) -> Dict[str, List[dict]]:
        return load_json(self.entries_file, {})

    # -------------------- Plans --------------------
    def create_plan(self, user_id: str, name: str, start_wager, odds, days: int) -> Plan:
        plan, _ = self.create_plan_with_entries(user_id, name, start_wager, odds, days)
        return plan

    def create_plan_with_entries(self, user_id: str, name: str, start_wager, odds, days: int,
                                 build_entries: Optional[Callable[[Plan], Iterable[DayEntry]]] = None
                                 ) -> Tuple[Plan, List[DayEntry]]:
        """Store a new plan together with the entries build_entries(plan) returns.

        Entries are written first and rolled back if the plan write fails, so
        no stored plan is ever left without its entries.
        """
        plan = Plan(id=str(uuid4()), user_id=user_id, name=name, start_wager=start_wager,
                    odds=odds, days=days, status=PLAN_ACTIVE)
        stored = _with_ids(build_entries(plan)) if build_entries else []
        with IO_LOCK:
            if stored:
                entries = self._read_entries()
                entries[plan.id] = [e.to_dict() for e in stored]
                atomic_write(self.entries_file, entries)
            plans = self._read_plans()
            plans.append(plan.to_dict())
            try:
                atomic_write(self.plans_file, plans)
            except Exception:
                if stored:
                    entries.pop(plan.id, None)
                    atomic_write(self.entries_file, entries)
                raise
        logger.debug("Stored plan %s for user %s with %s entries", plan.id, user_id, len(stored))
        return plan, stored

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        for record in self._read_plans():
            if record.get("id") == plan_id:
                return Plan.from_dict(record)
        return None

    def get_plans_by_user(self, user_id: str) -> List[Plan]:
        """Plans of one user, newest first."""
        plans = [Plan.from_dict(r) for r in self._read_plans() if r.get("user_id") == user_id]
        plans.sort(key=lambda p: p.created_at, reverse=True)
        return plans

    def update_plan_status(self, plan_id: str, status: str) -> bool:
        if status not in PLAN_STATUSES:
            raise ValueError(f"Unknown plan status: {status}")
        with IO_LOCK:
            plans = self._read_plans()
            for record in plans:
                if record.get("id") == plan_id:
                    record["status"] = status
                    atomic_write(self.plans_file, plans)
                    return True
        return False

    def delete_plan(self, plan_id: str) -> bool:
        """Delete a plan together with all of its day entries."""
        with IO_LOCK:
            plans = self._read_plans()
            remaining = [r for r in plans if r.get("id") != plan_id]
            if len(remaining) == len(plans):
                return False
            # plan first: leftover entries of a missing plan are never read
            atomic_write(self.plans_file, remaining)
            entries = self._read_entries()
            if entries.pop(plan_id, None) is not None:
                atomic_write(self.entries_file, entries)
        with self._locks_guard:
            self._locks.pop(plan_id, None)
        return True

    # -------------------- Day entries --------------------
    def create_day_entries(self, entries: Iterable[DayEntry]) -> List[DayEntry]:
        """Store entries that have no id yet; returns them with ids assigned."""
        stored = _with_ids(entries)
        with IO_LOCK:
            data = self._read_entries()
            for entry in stored:
                data.setdefault(entry.plan_id, []).append(entry.to_dict())
            for plan_entries in data.values():
                plan_entries.sort(key=lambda r: r["day"])
            atomic_write(self.entries_file, data)
        return stored

    def get_day_entries(self, plan_id: str) -> List[DayEntry]:
        records = self._read_entries().get(plan_id, [])
        return sorted((DayEntry.from_dict(r) for r in records), key=lambda e: e.day)

    def update_day_result(self, plan_id: str, day: int, result: str) -> bool:
        with IO_LOCK:
            data = self._read_entries()
            for record in data.get(plan_id, []):
                if record.get("day") == day:
                    record["result"] = result
                    atomic_write(self.entries_file, data)
                    return True
        return False

    def delete_day_entries_from_day(self, plan_id: str, from_day: int) -> int:
        """Remove entries with day >= from_day; returns how many were deleted."""
        with IO_LOCK:
            data = self._read_entries()
            records = data.get(plan_id, [])
            kept = [r for r in records if r.get("day", 0) < from_day]
            deleted = len(records) - len(kept)
            if deleted:
                data[plan_id] = kept
                atomic_write(self.entries_file, data)
        return deleted

    def replace_day_entries_from_day(self, plan_id: str, from_day: int,
                                     entries: Iterable[DayEntry]) -> Tuple[int, List[DayEntry]]:
        """Swap entries with day >= from_day for new ones in a single write.

        Returns (number of entries removed, the stored replacements).
        """
        stored = _with_ids(entries)
        with IO_LOCK:
            data = self._read_entries()
            records = data.get(plan_id, [])
            kept = [r for r in records if r.get("day", 0) < from_day]
            removed = len(records) - len(kept)
            kept.extend(e.to_dict() for e in stored)
            kept.sort(key=lambda r: r["day"])
            data[plan_id] = kept
            atomic_write(self.entries_file, data)
        return removed, stored


def _with_ids(entries: Iterable[DayEntry]) -> List[DayEntry]:
    return [
        DayEntry(id=str(uuid4()), plan_id=e.plan_id, day=e.day, wager=e.wager,
                 odds=e.odds, winnings=e.winnings, result=e.result)
        for e in entries
    ]

"""DayEntry domain entity: one day's wager/winnings projection and its outcome."""
from decimal import Decimal
from typing import Optional

from marathon.domain.money import to_decimal, to_storage
from marathon.utilities.constants import RESULT_PENDING


class DayEntry:
    def __init__(self, plan_id: str, day: int, wager: Decimal, odds: Decimal,
                 winnings: Decimal, result: str = RESULT_PENDING, id: Optional[str] = None):
        self.id = id
        self.plan_id = plan_id
        self.day = int(day)
        self.wager = to_decimal(wager)
        self.odds = to_decimal(odds)
        self.winnings = to_decimal(winnings)
        self.result = result

    @property
    def is_pending(self) -> bool:
        return self.result == RESULT_PENDING

    def __eq__(self, other):
        if not isinstance(other, DayEntry):
            return NotImplemented
        return (self.plan_id, self.day, self.wager, self.odds, self.winnings, self.result) == \
               (other.plan_id, other.day, other.wager, other.odds, other.winnings, other.result)

    __hash__ = None

    def __str__(self) -> str:
        return f"Day {self.day}: {self.wager} x {self.odds} = {self.winnings} [{self.result}]"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return DayEntry(
            id=data.get("id"),
            plan_id=data.get("plan_id", ""),
            day=data["day"],
            wager=data["wager"],
            odds=data["odds"],
            winnings=data["winnings"],
            result=data.get("result", RESULT_PENDING),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "plan_id": self.plan_id,
            "day": self.day,
            "wager": to_storage(self.wager),
            "odds": to_storage(self.odds),
            "winnings": to_storage(self.winnings),
            "result": self.result,
        }

    def to_api(self):
        d = self.to_dict()
        d["planId"] = d.pop("plan_id")
        return d

"""Plan domain entity: a compounding wager schedule owned by one user."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from marathon.domain.money import to_decimal, to_storage, compound
from marathon.utilities.constants import PLAN_ACTIVE, TIMESTAMP_FORMAT


class Plan:
    def __init__(self, id: Optional[str], user_id: str, name: str, start_wager: Decimal,
                 odds: Decimal, days: int, status: str = PLAN_ACTIVE,
                 created_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.name = name
        self.start_wager = to_decimal(start_wager)
        self.odds = to_decimal(odds)
        self.days = int(days)
        self.status = status
        self.created_at = created_at or datetime.now(timezone.utc)

    @property
    def potential_final(self) -> Decimal:
        '''Winnings on the last day if every day is won.'''
        return compound(self.start_wager, self.odds, self.days)

    def __str__(self) -> str:
        return f"{self.name} - {self.start_wager} x {self.odds} for {self.days} days ({self.status})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Plan from its persisted dictionary form.'''
        created = data.get("created_at")
        if isinstance(created, str) and created:
            created = datetime.strptime(created, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        return Plan(
            id=data.get("id"),
            user_id=data.get("user_id", ""),
            name=data.get("name", ""),
            start_wager=data["start_wager"],
            odds=data["odds"],
            days=data["days"],
            status=data.get("status", PLAN_ACTIVE),
            created_at=created or None,
        )

    def to_dict(self):
        '''Converts the Plan to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "start_wager": to_storage(self.start_wager),
            "odds": to_storage(self.odds),
            "days": self.days,
            "status": self.status,
            "created_at": self.created_at.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT),
        }

    def to_api(self):
        '''camelCase view returned by the JSON API.'''
        d = self.to_dict()
        return {
            "id": d["id"],
            "userId": d["user_id"],
            "name": d["name"],
            "startWager": d["start_wager"],
            "odds": d["odds"],
            "days": d["days"],
            "status": d["status"],
            "createdAt": d["created_at"],
        }

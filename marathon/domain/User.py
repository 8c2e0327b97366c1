"""User account entity and the authenticated Principal passed into plan operations."""
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from marathon.utilities.constants import TIMESTAMP_FORMAT


class Principal(NamedTuple):
    """Identity of the signed-in caller; carries no credentials."""
    id: str
    name: str
    email: str

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email}


class User:
    def __init__(self, id: Optional[str], name: str, email: str, password_hash: str,
                 password_salt: str, created_at: Optional[datetime] = None):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.password_salt = password_salt
        self.created_at = created_at or datetime.now(timezone.utc)

    def principal(self) -> Principal:
        return Principal(self.id, self.name, self.email)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        created = data.get("created_at")
        if isinstance(created, str) and created:
            created = datetime.strptime(created, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        return User(
            id=data.get("id"),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password_hash=data.get("password_hash", ""),
            password_salt=data.get("password_salt", ""),
            created_at=created or None,
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password_hash": self.password_hash,
            "password_salt": self.password_salt,
            "created_at": self.created_at.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT),
        }

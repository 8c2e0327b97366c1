from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from marathon.domain.User import User
from marathon.infra.json_store import IO_LOCK, load_json, atomic_write
from marathon.infra.paths import DATA_DIR, USERS_FILENAME, data_file


class UserExists(Exception):
    pass


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    def __init__(self, data_dir: Optional[Path] = None):
        self.users_file = data_file(Path(data_dir or DATA_DIR), USERS_FILENAME)

    def _read_users(self) -> List[dict]:
        return load_json(self.users_file, [])

    def create_user(self, name: str, email: str, password_hash: str, password_salt: str) -> User:
        email = _normalize_email(email)
        with IO_LOCK:
            users = self._read_users()
            if any(u.get("email") == email for u in users):
                raise UserExists(email)
            user = User(id=str(uuid4()), name=name.strip(), email=email,
                        password_hash=password_hash, password_salt=password_salt)
            users.append(user.to_dict())
            atomic_write(self.users_file, users)
        return user

    def get_user(self, user_id: str) -> Optional[User]:
        for record in self._read_users():
            if record.get("id") == user_id:
                return User.from_dict(record)
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = _normalize_email(email)
        for record in self._read_users():
            if record.get("email") == email:
                return User.from_dict(record)
        return None

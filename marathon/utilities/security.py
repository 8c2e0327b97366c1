"""Password hashing helpers (PBKDF2-SHA256 with a per-user random salt)."""
import hashlib
import hmac
import secrets
from typing import Optional, Tuple

from marathon.utilities.constants import PASSWORD_HASH_ITERATIONS


def hash_password(password: str, salt: Optional[bytes] = None) -> Tuple[str, str]:
    """Hash a password. Returns (hash_hex, salt_hex)."""
    if salt is None:
        salt = secrets.token_bytes(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PASSWORD_HASH_ITERATIONS)
    return dk.hex(), salt.hex()


def verify_password(password: str, stored_hash: str, stored_salt: str) -> bool:
    dk, _ = hash_password(password, bytes.fromhex(stored_salt))
    return hmac.compare_digest(dk, stored_hash)

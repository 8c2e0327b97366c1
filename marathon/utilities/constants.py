from typing import Final

# Plan status values
PLAN_ACTIVE: Final[str] = "active"
PLAN_STOPPED: Final[str] = "stopped"
PLAN_COMPLETED: Final[str] = "completed"
PLAN_STATUSES: Final[tuple] = (PLAN_ACTIVE, PLAN_STOPPED, PLAN_COMPLETED)

# Day entry result values
RESULT_PENDING: Final[str] = "pending"
RESULT_WIN: Final[str] = "win"
RESULT_LOSS: Final[str] = "loss"
RECORDABLE_RESULTS: Final[tuple] = (RESULT_WIN, RESULT_LOSS)

# Plan parameter bounds
MIN_DAYS: Final[int] = 1
MAX_DAYS: Final[int] = 365
MIN_START_WAGER: Final[int] = 1
MAX_PLAN_NAME_LENGTH: Final[int] = 100
MIN_PASSWORD_LENGTH: Final[int] = 6

# Password hashing (PBKDF2-SHA256)
PASSWORD_HASH_ITERATIONS: Final[int] = 200_000

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"

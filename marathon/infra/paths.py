from pathlib import Path

from marathon.utilities.config import DATA_DIR

# Centralized data file names (single source of truth)
PLANS_FILENAME = 'plans.json'
DAY_ENTRIES_FILENAME = 'day_entries.json'
USERS_FILENAME = 'users.json'


def data_file(data_dir: Path, filename: str) -> Path:
    return (Path(data_dir) / filename).resolve()


__all__ = ['DATA_DIR', 'PLANS_FILENAME', 'DAY_ENTRIES_FILENAME', 'USERS_FILENAME', 'data_file']

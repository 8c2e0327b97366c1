"""Small helpers shared by the JSON file repositories."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock

logger = logging.getLogger(__name__)

# Serializes every read-modify-write of the data files within this process.
IO_LOCK = RLock()


def load_json(path: Path, default):
    if not os.path.exists(path):
        return default
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Corrupt data file %s: %s", path, e)
            raise
    return data if data is not None else default


def atomic_write(path: Path, data) -> None:
    """Write JSON through a temp file in the same directory, then move it into place."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=os.path.dirname(path), prefix=f".{Path(path).stem}_", suffix=".json"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

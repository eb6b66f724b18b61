import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from wellness.domain.errors import StoreError

logger = logging.getLogger(__name__)


def load_json_object(path: Path) -> dict:
    """Read a JSON object from path; a missing file is an empty store."""
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise StoreError(f"Unexpected content in {path}: expected a JSON object")
    return data


def atomic_write_json(path: Path, data: dict) -> None:
    """Replace path with data in one move so readers never see a partial file."""
    directory = os.path.dirname(os.path.abspath(path))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".plans_", suffix=".json")
    except OSError as e:
        raise StoreError(f"Failed to prepare write for {path}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, path)
    except OSError as e:
        raise StoreError(f"Failed to write {path}: {e}") from e
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)

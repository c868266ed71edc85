from __future__ import annotations

"""Key-value persistence for timer state.

One JSON document per key under a data directory. Reads never fail: a missing,
unreadable or malformed file yields the caller's default. Writes report
success as a bool so a failing disk never interrupts timing.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Protocol

KEY_INSPECTION_CONFIG = "cubeTimer_inspectionConfig"
KEY_SOLVES = "cubeTimer_times"
KEY_SOLVES_NEXT_ID = "cubeTimer_nextId"
KEY_STEP_SOLVES = "cubeTimer_stepEntries"
KEY_STEP_SOLVES_NEXT_ID = "cubeTimer_nextStepId"
KEY_INDIVIDUAL_STEPS = "cubeTimer_individualStepRecords"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    def load(self, key: str, default: Any = None) -> Any: ...

    def save(self, key: str, value: Any) -> bool: ...


class JsonFileStore:
    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.data_dir / f"{key}.json"

    def load(self, key: str, default: Any = None) -> Any:
        p = self._path(key)
        if not p.exists():
            return default
        try:
            with p.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            return default

    def save(self, key: str, value: Any) -> bool:
        p = self._path(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(value, f, indent=2)
                os.replace(tmp, p)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except (OSError, TypeError, ValueError):
            return False
        return True


class MemoryStore:
    """In-process store; values are round-tripped through JSON like the file store."""

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            self._data[k] = json.dumps(v)
        self.fail_writes = False

    def load(self, key: str, default: Any = None) -> Any:
        raw = self._data.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            return default

    def save(self, key: str, value: Any) -> bool:
        if self.fail_writes:
            return False
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError):
            return False
        return True

    def put_raw(self, key: str, text: str) -> None:
        self._data[key] = text


"""
Draft Persistence

Durable key-value storage for in-progress drafts, plus the load/save/clear port
the controllers use. Loading never raises: a missing or corrupt draft falls back
to defaults, and persisted values are merged over the defaults field by field.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from copy import deepcopy
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

PAYSLIP_KEY = "payslipData"
OFFER_KEY = "offerLetterData"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, text: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, text: str) -> None:
        self.data[key] = text

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """
    One file per key under a directory (``<directory>/<key>.json``).

    Writes go to a temporary file in the same directory and are moved into place
    with ``os.replace``, so an interrupted write never leaves a truncated draft.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, text: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(temp_name, self.path_for(key))
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


def merge_over_defaults(defaults: dict[str, Any], parsed: dict[str, Any]) -> dict[str, Any]:
    """
    Merge a persisted payload over defaults.

    - Every key in ``defaults`` is present in the result.
    - A parsed value replaces the default when it has a compatible shape:
      nested objects merge recursively, scalars are stored as strings.
    - Keys only present in ``parsed`` are dropped.
    """
    merged: dict[str, Any] = {}
    for key, default in defaults.items():
        if key not in parsed:
            merged[key] = deepcopy(default)
            continue
        value = parsed[key]
        if isinstance(default, dict):
            if isinstance(value, dict):
                merged[key] = merge_over_defaults(default, value)
            else:
                logger.debug(f"Ignoring persisted '{key}': expected an object, got {type(value).__name__}")
                merged[key] = deepcopy(default)
        elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
            merged[key] = str(value)
        else:
            logger.debug(f"Ignoring persisted '{key}': unsupported value {value!r}")
            merged[key] = default

    dropped = sorted(set(parsed) - set(defaults))
    if dropped:
        logger.debug(f"Dropping unknown persisted fields: {', '.join(dropped)}")
    return merged


class DraftPersistence:
    """
    The load/save/clear port over a key-value store.

    Saves for a key are ignored until that key has been loaded once, so a write
    can never race ahead of the initial read and clobber a saved draft.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._ready: set[str] = set()

    def is_ready(self, key: str) -> bool:
        return key in self._ready

    def load(self, key: str, defaults: dict[str, Any]) -> dict[str, Any]:
        try:
            try:
                raw = self.store.get(key)
                if raw is None:
                    return deepcopy(defaults)
                parsed = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to parse saved draft '{key}': {e}")
                return deepcopy(defaults)
            except OSError as e:
                logger.warning(f"Failed to read saved draft '{key}': {e}")
                return deepcopy(defaults)
            if not isinstance(parsed, dict):
                logger.warning(f"Failed to parse saved draft '{key}': expected a JSON object")
                return deepcopy(defaults)
            return merge_over_defaults(defaults, parsed)
        finally:
            self._ready.add(key)

    def save(self, key: str, value: dict[str, Any]) -> bool:
        if key not in self._ready:
            logger.warning(f"Skipping save of '{key}' before the saved draft was loaded.")
            return False
        self.store.set(key, json.dumps(value, ensure_ascii=False))
        return True

    def clear(self, key: str) -> None:
        self.store.remove(key)

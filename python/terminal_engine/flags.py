"""
Persisted session flags.

A narrow key-value store interface (``get``/``set``/``delete`` of string
values) plus ``SessionFlags``, which reads and writes the two persisted
records on top of it: the shutdown flag and the visit tally.

Thread Safety:
    Writes replace the whole JSON file. There is no read-modify-write
    locking; the engine writes from a single event loop only.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from .models import VisitStats


__all__ = [
    "FlagStore",
    "InMemoryFlagStore",
    "JsonFileFlagStore",
    "FlagStoreReadError",
    "FlagStoreWriteError",
    "SessionFlags",
    "SHUTDOWN_KEY",
    "VISITS_KEY",
]


logger = logging.getLogger(__name__)


SHUTDOWN_KEY = "switchup_shutdown"
VISITS_KEY = "switchup_visits"


class FlagStoreWriteError(Exception):
    """Raised when writing the flag store fails."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write to {path}: {cause}")


class FlagStoreReadError(Exception):
    """Raised when reading the flag store fails."""

    def __init__(self, path: Path, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read from {path}: {cause}")


class FlagStore(Protocol):
    """String key-value store surviving process restarts."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class InMemoryFlagStore:
    """Dict-backed store used by tests and by the service when no file is configured."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


class JsonFileFlagStore:
    """
    Flag store persisted as a single JSON object on disk.

    The file is loaded once on construction and rewritten on every
    mutation. A missing file is an empty store; its parent directory is
    created on first write.

    Example:
        >>> store = JsonFileFlagStore(Path("./state/flags.json"))
        >>> store.set("switchup_shutdown", "true")
        >>> store.get("switchup_shutdown")
        'true'
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._values: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        """
        Read the store file.

        Raises:
            FlagStoreReadError: If the file cannot be read, is not valid
                JSON, or is not a JSON object.
        """
        if not self.path.exists():
            logger.debug("No flag store file at %s", self.path)
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise FlagStoreReadError(self.path, e) from e
        except OSError as e:
            raise FlagStoreReadError(self.path, e) from e

        if not isinstance(data, dict):
            raise FlagStoreReadError(self.path, ValueError("flag store must be a JSON object"))

        logger.info("Loaded %d flags from %s", len(data), self.path)
        return {str(key): str(value) for key, value in data.items()}

    def _flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise FlagStoreWriteError(self.path, e) from e

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._flush()
        logger.debug("Flag %s written to %s", key, self.path)

    def delete(self, key: str) -> None:
        if key not in self._values:
            return
        del self._values[key]
        self._flush()
        logger.debug("Flag %s removed from %s", key, self.path)


class SessionFlags:
    """Typed access to the shutdown flag and visit tally."""

    def __init__(self, store: FlagStore) -> None:
        self._store = store

    @property
    def store(self) -> FlagStore:
        return self._store

    @property
    def is_shutdown(self) -> bool:
        return self._store.get(SHUTDOWN_KEY) == "true"

    def mark_shutdown(self) -> None:
        self._store.set(SHUTDOWN_KEY, "true")
        logger.info("Shutdown flag persisted")

    def clear_shutdown(self) -> None:
        self._store.delete(SHUTDOWN_KEY)
        logger.info("Shutdown flag cleared")

    def load_visits(self) -> VisitStats:
        """
        Read the visit tally.

        A missing record is a fresh tally. A corrupt record is logged and
        replaced by a fresh tally on the next save.
        """
        raw = self._store.get(VISITS_KEY)
        if raw is None:
            return VisitStats()
        try:
            return VisitStats.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding unreadable visit record: %s", e)
            return VisitStats()

    def save_visits(self, stats: VisitStats) -> None:
        self._store.set(VISITS_KEY, stats.model_dump_json())

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import List, Optional
from .errors import StorageCorruption
from .models import HistoryItem
logger = logging.getLogger(__name__)
APP_HOME = Path(os.environ.get("INTERACTION_CHECKER_HOME", Path.home() / ".interaction_checker"))
DEFAULT_HISTORY_STORE = APP_HOME / "history.json"
def read_history_snapshot(store: Path) -> List[HistoryItem]:
    try:
        raw = json.loads(store.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise TypeError("history snapshot must be a JSON array")
        return [HistoryItem.from_dict(entry) for entry in raw]
    except (ValueError, TypeError, KeyError, AttributeError, RecursionError) as exc:
        raise StorageCorruption(f"Unreadable history snapshot at {store}: {exc}") from exc
class HistoryStore:
    """Most-recent-first list of completed analyses, persisted as one JSON snapshot."""
    def __init__(self, store: Path = DEFAULT_HISTORY_STORE) -> None:
        self.store = Path(store)
        self._items: List[HistoryItem] = []
    @property
    def items(self) -> List[HistoryItem]:
        return list(self._items)
    def load(self) -> List[HistoryItem]:
        if not self.store.exists():
            self._items = []
            return self.items
        try:
            self._items = read_history_snapshot(self.store)
        except StorageCorruption as exc:
            logger.warning("Discarding corrupt history: %s", exc)
            self._items = []
            self._delete_snapshot()
        except OSError as exc:
            logger.warning("Could not read history from %s: %s", self.store, exc)
            self._items = []
        return self.items
    def append(self, item: HistoryItem) -> None:
        self._items.insert(0, item)
        self._persist()
    def find_by_id(self, item_id: str) -> Optional[HistoryItem]:
        return next((item for item in self._items if item.id == item_id), None)
    def clear(self) -> None:
        self._items = []
        self._delete_snapshot()
    def _persist(self) -> None:
        payload = [item.to_dict() for item in self._items]
        try:
            self.store.parent.mkdir(parents=True, exist_ok=True)
            self.store.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not persist history to %s: %s", self.store, exc)
    def _delete_snapshot(self) -> None:
        try:
            self.store.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove history snapshot %s: %s", self.store, exc)

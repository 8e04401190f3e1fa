"""Content Store: announcements and journal links persisted in one JSON file."""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import RLock
from typing import List, Optional
from uuid import uuid4

from physio.domain.Announcement import Announcement, Journal
from physio.infra.paths import CONTENT_FILE
from physio.logic.program.clock import now_iso

logger = logging.getLogger(__name__)


class ContentRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else CONTENT_FILE
        self._lock = RLock()

    def _load(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except FileNotFoundError:
            store = {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in content file {self.path}: {e}")
            store = {}
        store.setdefault("announcements", [])
        store.setdefault("journals", [])
        return store

    def _save(self, store: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".content_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- Announcements ----------------------------------------------------
    def list_announcements(self) -> List[Announcement]:
        """Newest first."""
        with self._lock:
            items = [Announcement.from_dict(a) for a in self._load()["announcements"]]
        return sorted(items, key=lambda a: a.created_at, reverse=True)

    def add_announcement(self, title: str, content: str) -> Announcement:
        announcement = Announcement(id=f"ann_{uuid4().hex[:12]}", title=title, content=content,
                                    created_at=now_iso())
        with self._lock:
            store = self._load()
            store["announcements"].insert(0, announcement.to_dict())
            self._save(store)
        return announcement

    def update_announcement(self, announcement_id: str, title: str, content: str) -> Optional[Announcement]:
        with self._lock:
            store = self._load()
            for entry in store["announcements"]:
                if entry.get("id") == announcement_id:
                    entry["title"] = title
                    entry["content"] = content
                    self._save(store)
                    return Announcement.from_dict(entry)
        return None

    def delete_announcement(self, announcement_id: str) -> bool:
        with self._lock:
            store = self._load()
            kept = [a for a in store["announcements"] if a.get("id") != announcement_id]
            if len(kept) == len(store["announcements"]):
                return False
            store["announcements"] = kept
            self._save(store)
        return True

    # --- Journals ---------------------------------------------------------
    def list_journals(self) -> List[Journal]:
        with self._lock:
            return [Journal.from_dict(j) for j in self._load()["journals"]]

    def add_journal(self, title: str, publisher: str, year: int, link: str) -> Journal:
        journal = Journal(id=f"journal_{uuid4().hex[:12]}", title=title, publisher=publisher, year=year, link=link)
        with self._lock:
            store = self._load()
            store["journals"].append(journal.to_dict())
            self._save(store)
        return journal

    def update_journal(self, journal_id: str, title: str, publisher: str, year: int, link: str) -> Optional[Journal]:
        with self._lock:
            store = self._load()
            for index, entry in enumerate(store["journals"]):
                if entry.get("id") == journal_id:
                    journal = Journal(id=journal_id, title=title, publisher=publisher, year=year, link=link)
                    store["journals"][index] = journal.to_dict()
                    self._save(store)
                    return journal
        return None

    def delete_journal(self, journal_id: str) -> bool:
        with self._lock:
            store = self._load()
            kept = [j for j in store["journals"] if j.get("id") != journal_id]
            if len(kept) == len(store["journals"]):
                return False
            store["journals"] = kept
            self._save(store)
        return True


_default_repository: Optional[ContentRepository] = None


def get_content_repository() -> ContentRepository:
    global _default_repository
    if _default_repository is None:
        _default_repository = ContentRepository()
    return _default_repository

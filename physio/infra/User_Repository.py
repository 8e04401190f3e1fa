"""User Store: JSON-file persistence for UserRecord values.

Layout of the backing file::

    {"users": [ {<UserRecord.to_dict()>}, ... ]}

Writes go through a temp file and a move so a crash never leaves a half
written document. ``transaction(user_id)`` serializes read-modify-write
cycles for one user, so two concurrent "log a session" requests cannot both
read the same count and overwrite each other.
"""
from __future__ import annotations
import json
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Dict, Iterator, List, Optional
from uuid import uuid4

from physio.domain.User import UserRecord
from physio.domain.errors import ProgressStateError
from physio.infra.paths import USERS_FILE
from physio.utilities.constants import GUEST_USER_ID, GUEST_USER_NAME, GUEST_USER_EMAIL

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else USERS_FILE
        self._file_lock = RLock()
        self._user_locks: Dict[str, list] = {}
        self._user_locks_guard = Lock()

    # --- File helpers -----------------------------------------------------
    def _load(self) -> dict:
        if not self.path.exists():
            return {"users": []}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                store = json.load(f) or {}
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in users file {self.path}: {e}")
            return {"users": []}
        if not isinstance(store.get("users"), list):
            store["users"] = []
        return store

    def _save(self, store: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".users_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    # --- Store interface --------------------------------------------------
    def list_users(self) -> List[UserRecord]:
        users = []
        with self._file_lock:
            raw_users = self._load()["users"]
        for entry in raw_users:
            try:
                users.append(UserRecord.from_dict(entry))
            except ProgressStateError as e:
                logger.error(f"Skipping inconsistent user record {entry.get('id')}: {e}")
        return users

    def get(self, user_id: str) -> Optional[UserRecord]:
        with self._file_lock:
            raw_users = self._load()["users"]
        for entry in raw_users:
            if entry.get("id") == user_id:
                return UserRecord.from_dict(entry)
        return None

    def put(self, user: UserRecord) -> UserRecord:
        with self._file_lock:
            store = self._load()
            data = user.to_dict()
            for index, entry in enumerate(store["users"]):
                if entry.get("id") == user.id:
                    store["users"][index] = data
                    break
            else:
                store["users"].append(data)
            self._save(store)
        return user

    @contextmanager
    def transaction(self, user_id: str) -> Iterator[None]:
        """Hold the per-user lock for the duration of a read-modify-write cycle.

        Locks are counted per holder and waiter; the entry is dropped when the
        last one leaves, so ids that are never seen again do not pile up.
        """
        with self._user_locks_guard:
            entry = self._user_locks.setdefault(user_id, [Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._user_locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._user_locks[user_id]

    # --- Account helpers --------------------------------------------------
    def find_by_email(self, email: str) -> Optional[UserRecord]:
        normalized = email.strip().lower()
        for user in self.list_users():
            if user.email.lower() == normalized:
                return user
        return None

    def create_user(self, name: str, email: str, user_id: Optional[str] = None) -> UserRecord:
        """Create a profile with default settings; duplicate emails are rejected."""
        with self._file_lock:
            if self.find_by_email(email) is not None:
                raise ValueError("An account with this email already exists.")
            user = UserRecord(id=user_id or f"user_{uuid4().hex[:12]}", name=name.strip(), email=email.strip())
            self.put(user)
        logger.info(f"Created user {user.id}")
        return user

    def ensure_guest_user(self) -> UserRecord:
        guest = self.get(GUEST_USER_ID)
        if guest is None:
            guest = self.put(UserRecord(id=GUEST_USER_ID, name=GUEST_USER_NAME, email=GUEST_USER_EMAIL))
            logger.info("Guest user initialized")
        return guest


_default_repository: Optional[UserRepository] = None


def get_user_repository() -> UserRepository:
    """FastAPI dependency returning the process-wide User Store."""
    global _default_repository
    if _default_repository is None:
        _default_repository = UserRepository()
    return _default_repository

"""
User store for Thingful (in-memory implementation).

Responsibilities:
    - Assign ids and creation timestamps on insert
    - Enforce `user_name` uniqueness
    - Look users up by user name

Design:
    - In-memory reference implementation of the BaseUserStore contract,
      kept simple so unit/integration tests stay fast and deterministic.
    - Inserts run under a lock; the id counter and the uniqueness check must
      move together when requests are served from the worker thread pool.
    - Records are copied on the way in and out so callers cannot mutate
      stored state.
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .base import BaseUserStore, DuplicateUserError


class UserStore(BaseUserStore):
    def __init__(self):
        """
        Initialize an empty store.

        Internal schema:
            self.users = {
                user_name: {
                    "id": int,
                    "user_name": str,
                    "full_name": str,
                    "nickname": Optional[str],
                    "password": str,          # bcrypt hash
                    "date_created": datetime, # UTC
                }
            }
        """
        self.users: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def find_by_username(self, user_name: str) -> Optional[Dict[str, Any]]:
        record = self.users.get(user_name)
        return dict(record) if record else None

    def insert(self, new_user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new user record.

        Rules:
            - `user_name` must not be taken (raises DuplicateUserError).
            - Caller-supplied `id`/`date_created` are ignored; the store assigns them.

        Returns:
            Dict[str, Any]: The stored record.
        """
        user_name = new_user["user_name"]
        with self._lock:
            if user_name in self.users:
                raise DuplicateUserError(user_name)
            record = {
                "id": next(self._ids),
                "user_name": user_name,
                "full_name": new_user.get("full_name"),
                "nickname": new_user.get("nickname"),
                "password": new_user["password"],
                "date_created": datetime.now(timezone.utc),
            }
            self.users[user_name] = record
        return dict(record)

    def user_name_exists(self, user_name: str) -> bool:
        return user_name in self.users

"""
Base user store interface for Thingful.

Purpose:
    Define the narrow contract the auth core needs from persistence
    (lookup by user name, insert, existence check) so the in-memory and
    PostgreSQL backends are interchangeable behind the Auth Gate and the
    UsersService.

Testing & Coverage:
    Abstract methods are annotated with `# pragma: no cover`; they are never
    executed directly.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StoreFailure(Exception):
    """Unexpected persistence-layer failure. Rendered as a 5xx, never a 401."""


class DuplicateUserError(StoreFailure):
    """The store rejected an insert on the `user_name` uniqueness constraint."""

    def __init__(self, user_name: str):
        super().__init__(f"User name already exists: {user_name!r}")
        self.user_name = user_name


class BaseUserStore(ABC):
    """Abstract base class for user store backends."""

    @abstractmethod  # pragma: no cover
    def find_by_username(self, user_name: str) -> Optional[Dict[str, Any]]:
        """
        Return the single user record whose `user_name` matches, or None.

        Returns:
            Optional[Dict[str, Any]]: Record with id, user_name, full_name,
            nickname, password (hash) and date_created.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def insert(self, new_user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist a new user and return the stored version.

        The store assigns `id` and `date_created`.

        Raises:
            DuplicateUserError: If `user_name` is already taken.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def user_name_exists(self, user_name: str) -> bool:
        """Return True if a user with this name is stored."""
        raise NotImplementedError

"""
UsersService module for Thingful.

Responsibilities:
    - Enforce the password policy at registration time
    - Hash passwords with bcrypt and compare presented passwords against hashes
    - Check user-name availability and insert new users through the store
    - Produce the public, sanitized view of a user record

Design notes:
    - The store is an injected dependency; nothing here reaches for global state.
    - Policy violations and duplicate user names are reported as data
      (a message / RegistrationError) so the HTTP layer can render them as 400s.
    - Other store failures propagate unchanged to the generic 5xx handling.
    - bcrypt is CPU bound; callers on the event loop must run hash/compare in
      the worker thread pool (the Auth Gate does, sync routes get it for free).
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import bcrypt

from ..sanitizer import sanitize
from ..storage.base import BaseUserStore, DuplicateUserError
from .password_policy import first_violation

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("full_name", "user_name", "password")

# bcrypt reads at most this many bytes of the secret
BCRYPT_MAX_BYTES = 72


def _bcrypt_secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class RegistrationError(Exception):
    """A registration request the caller can fix (rendered as a 4xx)."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UsersService:
    """
    Credential lifecycle for Thingful users.

    Args:
        store (BaseUserStore): Backend user store.
        rounds (int): bcrypt cost factor (log2 rounds). Higher is slower and
            harder to brute-force.
        sanitizer (Callable): Filter applied to free-text fields on output.
    """

    def __init__(
        self,
        store: BaseUserStore,
        rounds: int = 12,
        sanitizer: Callable[[Optional[str]], Optional[str]] = sanitize,
    ):
        self.store = store
        self.rounds = rounds
        self.sanitizer = sanitizer

    # ---------------------------------------------------------------------
    # Policy / hashing
    # ---------------------------------------------------------------------
    @staticmethod
    def validate_password(password: str) -> Optional[str]:
        """
        Check `password` against the policy.

        Returns:
            Optional[str]: The message of the first violated rule, or None.
        """
        return first_violation(password)

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt hash of `password` using the configured cost."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_bcrypt_secret(password), salt).decode("utf-8")

    @staticmethod
    def compare_passwords(password: str, hashed: str) -> bool:
        """
        Constant-time check of `password` against a bcrypt `hashed` value.

        Only the first 72 bytes of `password` count, matching `hash_password`.

        Raises:
            ValueError: If `hashed` is missing or not a valid bcrypt hash.
        """
        if not isinstance(hashed, str):
            raise ValueError("Stored password hash is not a string")
        return bcrypt.checkpw(_bcrypt_secret(password), hashed.encode("utf-8"))

    # ---------------------------------------------------------------------
    # Store access
    # ---------------------------------------------------------------------
    def user_name_exists(self, user_name: str) -> bool:
        return self.store.user_name_exists(user_name)

    def insert_user(self, new_user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Persist `new_user` and return the stored record (with id and date_created).

        Raises:
            DuplicateUserError: If the store rejects the user name as taken.
        """
        return self.store.insert(new_user)

    # ---------------------------------------------------------------------
    # Serialization
    # ---------------------------------------------------------------------
    def serialize_user(self, user: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Public view of a user record. Never includes the password hash.

        Accepts both `nickname` and the legacy `nick_name` column name.
        """
        nickname = user.get("nickname", user.get("nick_name"))
        return {
            "id": user.get("id"),
            "full_name": self.sanitizer(user.get("full_name")),
            "user_name": self.sanitizer(user.get("user_name")),
            "nickname": self.sanitizer(nickname),
            "date_created": user.get("date_created"),
        }

    # ---------------------------------------------------------------------
    # Registration
    # ---------------------------------------------------------------------
    def register(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Register a new user and return its serialized view.

        Flow:
            required fields -> user name format -> password policy -> user name availability
            -> hash -> insert -> serialize

        Raises:
            RegistrationError: Missing field, invalid or taken user name, or policy violation.
        """
        for field in REQUIRED_FIELDS:
            if not payload.get(field):
                raise RegistrationError(f"Missing '{field}' in request body")

        user_name = payload["user_name"]
        # credentials travel as user_name:password, split on the first colon
        if ":" in user_name:
            raise RegistrationError("User name must not contain ':'")

        password = payload["password"]
        violation = self.validate_password(password)
        if violation:
            raise RegistrationError(violation)

        if self.user_name_exists(user_name):
            raise RegistrationError("Username already taken")

        new_user = {
            "user_name": user_name,
            "full_name": payload["full_name"],
            "nickname": payload.get("nickname"),
            "password": self.hash_password(password),
        }
        try:
            user = self.insert_user(new_user)
        except DuplicateUserError:
            # lost a race against a concurrent registration
            raise RegistrationError("Username already taken")

        log.info("Registered user id=%s", user.get("id"))
        return self.serialize_user(user)

"""
Core authentication logic: the Auth Gate.

Verification is a fixed sequence of steps, each of which either raises an
AuthError or hands its result to the next one:

    scheme check -> decode -> user lookup -> password comparison

The store and the UsersService are injected. The lookup and the bcrypt
comparison are blocking, so both run in the worker thread pool to keep the
event loop free for concurrent requests.
"""

import logging
from typing import Any, Dict, Optional

import anyio
import anyio.to_thread
from fastapi.concurrency import run_in_threadpool

from thingful.storage.base import BaseUserStore, StoreFailure
from thingful.users.users_service import UsersService

from .errors import BadPassword, MalformedCredentials, MissingCredentials, UnknownUser
from .utils import decode_credentials, extract_bearer_token

log = logging.getLogger(__name__)


class AuthGate:
    """
    Verifies bearer-encoded credentials against the user store.

    Args:
        store (BaseUserStore): Where users are looked up by user name.
        users_service (UsersService): Owns the password comparison.
        lookup_timeout (Optional[float]): Seconds allowed for the store lookup;
            None waits indefinitely.
    """

    def __init__(
        self,
        store: BaseUserStore,
        users_service: UsersService,
        lookup_timeout: Optional[float] = None,
    ):
        self.store = store
        self.users_service = users_service
        self.lookup_timeout = lookup_timeout
        # Compared against when the user is unknown, so both rejections cost one bcrypt check.
        self._dummy_hash = users_service.hash_password("thingful-unknown-user")

    async def authenticate(self, authorization: Optional[str]) -> Dict[str, Any]:
        """
        Authenticate the value of an `Authorization` header.

        Args:
            authorization (Optional[str]): Raw header value, None if absent.

        Returns:
            Dict[str, Any]: The stored user record.

        Raises:
            MissingCredentials: No bearer scheme.
            MalformedCredentials: Token is not a non-empty username:password pair.
            UnknownUser: No such user.
            BadPassword: Password does not match.
            StoreFailure: The lookup timed out. Other store errors propagate as-is.
        """
        token = extract_bearer_token(authorization)
        if token is None:
            raise MissingCredentials()

        credentials = decode_credentials(token)
        if credentials is None:
            log.info("Rejected request: malformed credentials")
            raise MalformedCredentials()
        user_name, password = credentials

        user = await self._find_user(user_name)
        if user is None:
            await self._verify(password, self._dummy_hash)
            log.info("Rejected request: unknown user")
            raise UnknownUser()

        if not await self._verify(password, user["password"]):
            log.info("Rejected request: bad password for user id=%s", user.get("id"))
            raise BadPassword()

        return user

    async def _find_user(self, user_name: str) -> Optional[Dict[str, Any]]:
        if self.lookup_timeout is None:
            return await run_in_threadpool(self.store.find_by_username, user_name)
        try:
            with anyio.fail_after(self.lookup_timeout):
                # abandon the worker thread on timeout instead of waiting it out
                return await anyio.to_thread.run_sync(
                    self.store.find_by_username, user_name, abandon_on_cancel=True
                )
        except TimeoutError:
            log.error("User lookup exceeded %.1fs", self.lookup_timeout)
            raise StoreFailure("User lookup timed out") from None

    async def _verify(self, password: str, hashed: str) -> bool:
        try:
            return await run_in_threadpool(self.users_service.compare_passwords, password, hashed)
        except ValueError:
            log.warning("Stored password hash could not be parsed")
            return False

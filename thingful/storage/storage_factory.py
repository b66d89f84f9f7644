"""
Storage factory – switch user store backend from config (lazy env version)
=========================================================================

Centralizes selection of the user store backend (in-memory vs DB) so the
rest of the app can stay ignorant of where users live.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- THINGFUL_STORAGE_BACKEND: "memory" (default) or "postgres"
- THINGFUL_DB_DSN:          DSN string if backend=="postgres"
"""

import logging
import os
from typing import Optional

from thingful.storage.base import BaseUserStore
from thingful.storage.storage import UserStore

log = logging.getLogger(__name__)


def get_user_store(backend: Optional[str] = None, **kwargs) -> BaseUserStore:
    """
    Return a user store based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads THINGFUL_STORAGE_BACKEND.
    kwargs : dict
        Extra args passed to the backend constructor. For postgres, use dsn="...".

    Returns
    -------
    BaseUserStore-compatible instance
    """
    be = (backend or os.getenv("THINGFUL_STORAGE_BACKEND", "memory")).strip().lower()
    log.debug("Selected storage backend: %r", be)

    if be == "memory":
        return UserStore()

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("THINGFUL_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env THINGFUL_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from thingful.storage.db_storage import DBUserStore
        return DBUserStore(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")

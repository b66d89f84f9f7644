"""
thingful package initializer.
"""

from . import storage
from . import users

__all__ = ["storage", "users"]

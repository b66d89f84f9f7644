"""
Auth package for Thingful.

Provides the bearer-credential Auth Gate: Basic-style `username:password`
pairs carried in an `Authorization: Bearer <base64>` header, verified
against the user store with bcrypt.
"""

from .errors import AuthError, BadPassword, MalformedCredentials, MissingCredentials, UnknownUser
from .service import AuthGate

__all__ = [
    "AuthError",
    "AuthGate",
    "BadPassword",
    "MalformedCredentials",
    "MissingCredentials",
    "UnknownUser",
]

"""
Authentication failures raised by the Auth Gate.

All of them map to HTTP 401. A malformed *request* (no bearer scheme) gets its
own message; every failure involving the credential itself shares one generic
message so responses never reveal whether an account exists.
"""

GENERIC_MESSAGE = "Unauthorized request"


class AuthError(Exception):
    """Base class for rejected authentication attempts."""

    status_code = 401
    message = GENERIC_MESSAGE

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingCredentials(AuthError):
    """Header absent or not using the bearer scheme."""

    message = "Missing bearer token"


class MalformedCredentials(AuthError):
    """Token does not decode to a non-empty `username:password` pair."""


class UnknownUser(AuthError):
    """No user with the presented user name."""


class BadPassword(AuthError):
    """Password does not match the stored hash."""

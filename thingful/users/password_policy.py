"""
Password policy for Thingful registrations.

The policy is an ordered list of independent rules; evaluation stops at the
first rule that fails and its message is reported back to the caller as data.

Rules (in order):
    1. at least 8 characters
    2. at most 72 characters
    3. no leading or trailing space
    4. one lowercase, one uppercase, one digit, one of ``!@#$%^&``, no whitespace
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

MIN_LENGTH = 8
MAX_LENGTH = 72
SPECIAL_CHARACTERS = "!@#$%^&"

UPPER_LOWER_NUMBER_SPECIAL = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[" + re.escape(SPECIAL_CHARACTERS) + r"])\S+"
)


@dataclass(frozen=True)
class PasswordRule:
    """A single policy rule: `check` returns True when the password satisfies it."""
    name: str
    message: str
    check: Callable[[str], bool]


def _long_enough(password: str) -> bool:
    return len(password) >= MIN_LENGTH


def _short_enough(password: str) -> bool:
    return len(password) <= MAX_LENGTH


def _no_edge_spaces(password: str) -> bool:
    return not (password.startswith(" ") or password.endswith(" "))


def _complex_enough(password: str) -> bool:
    return UPPER_LOWER_NUMBER_SPECIAL.fullmatch(password) is not None


PASSWORD_RULES: Tuple[PasswordRule, ...] = (
    PasswordRule(
        "min_length",
        f"Password must be at least {MIN_LENGTH} characters in length",
        _long_enough,
    ),
    PasswordRule(
        "max_length",
        f"Password must be at most {MAX_LENGTH} characters in length",
        _short_enough,
    ),
    PasswordRule(
        "edge_spaces",
        "Password must not start or end with empty spaces",
        _no_edge_spaces,
    ),
    PasswordRule(
        "complexity",
        "Password must contain 1 upper case, lower case, number and special character",
        _complex_enough,
    ),
)


def first_violation(password: str, rules: Tuple[PasswordRule, ...] = PASSWORD_RULES) -> Optional[str]:
    """Return the message of the first rule `password` breaks, or None."""
    for rule in rules:
        if not rule.check(password):
            return rule.message
    return None

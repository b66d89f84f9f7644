"""
Utility functions for the auth module: bearer header parsing and
credential decoding.
"""

import base64
import binascii
from typing import Optional, Tuple

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the part after a case-insensitive ``"bearer "`` prefix.

    Returns None when the header is absent or uses another scheme.
    """
    header = authorization or ""
    if not header.lower().startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):]


def decode_credentials(token: str) -> Optional[Tuple[str, str]]:
    """
    Decode a base64 ``username:password`` token.

    The string is split on the first colon, so passwords may contain colons.
    Missing padding is tolerated.

    Returns:
        Optional[Tuple[str, str]]: (username, password), or None if the token
        is not valid base64/UTF-8 or either part is empty.
    """
    token = token.strip()
    try:
        raw = base64.b64decode(token + "=" * (-len(token) % 4))
        decoded = raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, _, password = decoded.partition(":")
    if not username or not password:
        return None
    return username, password

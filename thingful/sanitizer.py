"""
Output sanitizer for user-supplied free text.

Escapes HTML markup so stored text can be echoed back in JSON that may end
up rendered by a browser. Existing entities are unescaped before escaping,
which makes the filter idempotent: sanitizing already-sanitized text returns
it unchanged.
"""

from html import escape, unescape
from typing import Optional


def sanitize(text: Optional[str]) -> Optional[str]:
    """
    Neutralize markup in `text`.

    >>> sanitize('<script>alert(1)</script>')
    '&lt;script&gt;alert(1)&lt;/script&gt;'
    >>> sanitize(sanitize('Tom & "Jerry"')) == sanitize('Tom & "Jerry"')
    True
    """
    if text is None:
        return None
    return escape(unescape(str(text)), quote=True)

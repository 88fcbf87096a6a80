"""
Sanitization utilities for contact form input.

Contact form fields end up in plain-text emails, so markup is removed
rather than whitelisted.
"""

import html
from typing import Optional

import bleach


def sanitize_plain_text(content: Optional[str]) -> Optional[str]:
    """
    Strip all HTML tags for plain text fields.

    After the tags are removed every HTML entity is decoded, both the escapes
    bleach adds (``&`` becomes ``&amp;``) and any the user typed, so
    ``&lt;b&gt;`` comes out as ``<b>``. The result is only ever used as
    plain text.

    Args:
        content: Raw content from user input

    Returns:
        Plain text with all HTML removed and surrounding whitespace trimmed,
        or None if input is None

    Examples:
        >>> sanitize_plain_text('<script>alert(1)</script>Title')
        'alert(1)Title'
        >>> sanitize_plain_text('<b>Cats</b> & dogs')
        'Cats & dogs'
        >>> sanitize_plain_text('I typed &lt;b&gt; literally')
        'I typed <b> literally'
    """
    if content is None:
        return None

    cleaned = bleach.clean(content, tags=[], strip=True)
    return html.unescape(cleaned).strip()


def mask_token(token: Optional[str], visible: int = 8) -> str:
    """
    Shorten a secret token for log output.

    Args:
        token: Token value (may be None)
        visible: Number of leading characters to keep

    Returns:
        The first ``visible`` characters followed by an ellipsis
    """
    if not token:
        return "<none>"
    if len(token) <= visible:
        return "***"
    return f"{token[:visible]}..."

"""
Email and title rules shared by the server and the client.

The email pattern is deliberately permissive: ``local@domain.tld``
with no whitespace and no second ``@``.  It rejects obvious typos
rather than implementing RFC 5322.
"""

import re


EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

EMAIL_REQUIRED = "Email is required"
POST_TITLE_REQUIRED = "Post title is required"


def is_valid_email(value: str) -> bool:
    """Match ``value`` with surrounding whitespace ignored."""
    return EMAIL_PATTERN.fullmatch(value.strip()) is not None

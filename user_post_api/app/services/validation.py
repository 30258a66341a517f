"""
Input validation for user creation requests.

Checks run in a fixed order and the first failure wins:

1. ``email`` is present, a string and not blank;
2. the trimmed email looks like ``local@domain.tld``;
3. if a ``post`` is supplied, its ``title`` is present, a string and
   not blank.

These checks are authoritative on the server even though the client
package runs the same checks before submitting.
"""

from typing import Any, Optional

from user_post_api.validation import EMAIL_PATTERN, EMAIL_REQUIRED, POST_TITLE_REQUIRED, is_valid_email

from ..core.errors import ValidationError
from ..schemas.post import PostCreate
from ..schemas.user import UserCreate


__all__ = [
    "EMAIL_PATTERN",
    "EMAIL_REQUIRED",
    "INVALID_EMAIL",
    "POST_TITLE_REQUIRED",
    "clean_optional_text",
    "is_valid_email",
    "post_supplied",
    "validate_create_request",
    "validate_email",
    "validate_post_title",
]

INVALID_EMAIL = "Invalid email format"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def post_supplied(value: Any) -> bool:
    """Whether a raw ``post`` value asks for a post to be created.

    ``null``, ``false``, ``0`` and ``""`` mean no post.  Objects and
    arrays count as supplied even when empty.
    """
    if value is None:
        return False
    if isinstance(value, (bool, int, float, str)):
        return bool(value)
    return True


def validate_email(value: Any) -> str:
    """Return the trimmed email or raise ``ValidationError``."""
    if _is_blank(value):
        raise ValidationError(EMAIL_REQUIRED)
    email = value.strip()
    if not is_valid_email(email):
        raise ValidationError(INVALID_EMAIL)
    return email


def validate_post_title(value: Any) -> str:
    if _is_blank(value):
        raise ValidationError(POST_TITLE_REQUIRED)
    return value.strip()


def clean_optional_text(value: Any) -> Optional[str]:
    """Trim optional text; blank, missing and non-string values become ``None``."""
    if _is_blank(value):
        return None
    return value.strip()


def validate_create_request(body: Any) -> UserCreate:
    """Validate and normalise a raw creation request body.

    ``body`` is the decoded JSON document.  Anything other than an
    object carries no email and fails the first check.  See
    ``post_supplied`` for when a post is requested; a supplied post that
    is not an object has no title.  ``published`` is true only for the JSON
    value ``true``.
    """
    if not isinstance(body, dict):
        raise ValidationError(EMAIL_REQUIRED)

    email = validate_email(body.get("email"))

    raw_post = body.get("post")
    post = None
    if post_supplied(raw_post):
        if not isinstance(raw_post, dict):
            raise ValidationError(POST_TITLE_REQUIRED)
        post = PostCreate(
            title=validate_post_title(raw_post.get("title")),
            content=clean_optional_text(raw_post.get("content")),
            published=raw_post.get("published") is True,
        )

    return UserCreate(email=email, name=clean_optional_text(body.get("name")), post=post)

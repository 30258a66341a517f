"""Add-user form state and submission.

``AddUserForm`` holds what the user typed into the form rendered by the
assistant and drives a submission: local checks, the API call, a
message to the assistant thread describing the result, a refresh of
the user list and a form reset.

The local checks mirror the server's so obvious mistakes are reported
without a round trip.  They are advisory: the server validates again
and its answer is what counts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from user_post_api.validation import EMAIL_REQUIRED, POST_TITLE_REQUIRED, is_valid_email

from .api_client import UserPostAPI
from .thread import ThreadNotifier


logger = logging.getLogger(__name__)

INVALID_EMAIL = "Please enter a valid email address"


def describe_creation(created: Dict[str, Any]) -> str:
    """Summarise a creation result for the assistant thread."""
    user = created["user"]
    text = (
        "Successfully added a new user to the database! "
        f"User details: Email: {user['email']}, Name: {user.get('name') or 'N/A'}, User ID: {user['id']}."
    )
    post = created.get("post")
    if post:
        text += (
            f' Post details: Title: "{post["title"]}", '
            f"Published: {'Yes' if post.get('published') else 'No'}, Post ID: {post['id']}."
        )
    return text + " The user table has been updated."


@dataclass
class AddUserForm:
    api: UserPostAPI
    notifier: Optional[ThreadNotifier] = None
    thread_id: Optional[str] = None
    on_success: Optional[Callable[[Dict[str, Any]], None]] = None
    on_error: Optional[Callable[[str], None]] = None
    on_refresh: Optional[Callable[[], None]] = None

    email: str = ""
    name: str = ""
    post_title: str = ""
    post_content: str = ""
    published: bool = False
    error: Optional[str] = field(default=None, init=False)
    is_submitting: bool = field(default=False, init=False)

    def reset(self) -> None:
        self.email = ""
        self.name = ""
        self.post_title = ""
        self.post_content = ""
        self.published = False

    def validate(self) -> Optional[str]:
        """Return the first problem with the current input, or ``None``."""
        if not self.email.strip():
            return EMAIL_REQUIRED
        if not is_valid_email(self.email):
            return INVALID_EMAIL
        if not self.post_title.strip():
            return POST_TITLE_REQUIRED
        return None

    def payload(self) -> Dict[str, Any]:
        return {
            "email": self.email.strip(),
            "name": self.name.strip() or None,
            "post": {
                "title": self.post_title.strip(),
                "content": self.post_content.strip() or None,
                "published": self.published,
            },
        }

    def _fail(self, message: str) -> None:
        self.error = message
        if self.on_error:
            self.on_error(message)

    def submit(self) -> Optional[Dict[str, Any]]:
        """Submit the form.

        Returns the created ``{"user", "post"}`` on success.  On failure
        returns ``None`` and leaves the message in ``error``; the input
        is kept so the user can correct it.
        """
        self.error = None
        problem = self.validate()
        if problem:
            self.error = problem
            return None

        self.is_submitting = True
        try:
            created, error = self.api.add_user(self.payload())
            if error:
                self._fail(error["message"] or "Failed to add user")
                return None

            self._notify(created)
            if self.on_success:
                self.on_success(created)
            if self.on_refresh:
                self.on_refresh()
            self.reset()
            return created
        finally:
            self.is_submitting = False

    def _notify(self, created: Dict[str, Any]) -> None:
        if self.notifier is None or self.thread_id is None:
            return
        try:
            self.notifier.send_thread_message(describe_creation(created), self.thread_id, stream_response=True)
        except Exception:
            # The user was created; a lost notification must not turn that into a failure.
            logger.exception("Failed to notify assistant thread %s", self.thread_id)

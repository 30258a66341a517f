"""Assistant thread notifications.

After the client changes data on the user's behalf it tells the
assistant what happened by posting a message to the current
conversation thread.  ``ThreadNotifier`` is the interface the rest of
the client depends on; ``HttpThreadNotifier`` delivers messages to an
assistant service over HTTP.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from user_post_api.config import settings


logger = logging.getLogger(__name__)


class ThreadNotifier(ABC):
    """Sends free-text messages to an assistant conversation thread."""

    @abstractmethod
    def send_thread_message(self, text: str, thread_id: str, stream_response: bool = True) -> None:
        """Deliver ``text`` to ``thread_id``; raise on failure."""


class HttpThreadNotifier(ThreadNotifier):
    """Posts thread messages to ``{base_url}/threads/{thread_id}/messages``.

    The request body is ``{"content": text, "stream": stream_response}``.
    Failed deliveries raise ``requests.RequestException``; callers
    decide whether a lost notification matters.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def send_thread_message(self, text: str, thread_id: str, stream_response: bool = True) -> None:
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        body: Dict[str, Any] = {"content": text, "stream": stream_response}
        url = f"{self.base_url}/threads/{thread_id}/messages"
        logger.debug("Posting message to thread %s", thread_id)
        response = self.session.post(url, json=body, headers=headers, timeout=self.timeout)
        response.raise_for_status()


def notifier_from_settings() -> Optional[HttpThreadNotifier]:
    """Build a notifier from ``ASSISTANT_BASE_URL``/``ASSISTANT_API_KEY``, or ``None`` if unset."""
    if not settings.assistant_base_url:
        return None
    return HttpThreadNotifier(
        base_url=settings.assistant_base_url,
        api_key=settings.assistant_api_key or None,
    )

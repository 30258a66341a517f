"""User Post API client.

A thin wrapper around the users endpoints of the API, built on
``requests``.  Every operation returns a tuple ``(data, error)``: on
success ``data`` holds the decoded JSON and ``error`` is ``None``; on
failure ``data`` is ``None`` and ``error`` is a dict with the keys
``status_code`` and ``message``.  ``message`` is the server's ``error``
text, unchanged, so it can be shown to the user as is.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ApiError = Dict[str, Any]


class UserPostAPI:
    """Client for the users endpoints."""

    USERS_PATH = "/api/v1/users/"

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:8000``.
            api_key: Optional session token sent as ``Authorization:
                Bearer <api_key>``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for the server.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

        if response.status_code >= 400:
            message = ""
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("detail") or ""
            if not message:
                message = f"Request failed: {response.reason or response.status_code}"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}

        if response.content:
            return response.json(), None
        return None, None

    def add_user(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create a user (and optional first post).

        Returns:
            A tuple ``(created, error)``; ``created`` has the keys
            ``user`` and ``post``.
        """
        return self._request("POST", self.USERS_PATH, json_body=payload)

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve every user with its posts."""
        data, error = self._request("GET", self.USERS_PATH)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

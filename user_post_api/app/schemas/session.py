"""
Schemas describing the signed-in user of the web front end.
"""

from typing import Optional

from pydantic import BaseModel


class SessionUser(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None


class SessionRead(BaseModel):
    """Session state as returned to the front end; ``user`` is null when signed out."""

    user: Optional[SessionUser] = None

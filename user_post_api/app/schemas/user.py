"""
Pydantic models for user data.

``UserCreate`` is the normalised form of a creation request, produced by
``services.validation`` after trimming and checking the raw body.  The
raw body itself is not modelled with pydantic because malformed input
has to be reported with specific messages and a 400 status.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .post import PostCreate, PostRead


class UserBase(BaseModel):
    email: str = Field(..., examples=["user@example.com"])
    name: Optional[str] = Field(None, examples=["Jane Doe"])


class UserCreate(UserBase):
    """A validated request to create a user and, optionally, its first post."""

    post: Optional[PostCreate] = None


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class UserWithPosts(UserRead):
    """A user together with every post it owns."""

    posts: List[PostRead] = []


class UserCreated(BaseModel):
    """Result of creating a user; ``post`` is null when none was requested."""

    user: UserRead
    post: Optional[PostRead] = None


class ErrorResponse(BaseModel):
    error: str

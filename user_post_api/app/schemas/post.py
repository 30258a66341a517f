"""
Pydantic models for posts.

The API exposes the owning user's id as ``authorId`` to stay compatible
with the web front end; Python code uses ``author_id``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """A validated, normalised request to create a post."""

    title: str = Field(..., examples=["Hello world"])
    content: Optional[str] = Field(None, examples=["My first post"])
    published: bool = Field(False, examples=[False])


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: int
    title: str
    content: Optional[str] = None
    published: bool = False
    author_id: int = Field(..., alias="authorId")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }

"""
Business logic for users and their posts.

``UserService.create_user_with_post`` is the record creation path:
validate, pre-check the email, then write the user and its optional
first post in one transaction.  ``UserService.list_users`` is the
read path used by the dashboard and the assistant's chart tool.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import get_connection, is_unique_violation, transaction
from ..core.errors import ConflictError, InternalError
from ..schemas.post import PostRead
from ..schemas.user import UserCreate, UserCreated, UserRead, UserWithPosts
from .validation import validate_create_request


logger = logging.getLogger(__name__)

USER_EXISTS = "User with this email already exists"
CREATE_FAILED = "Failed to create user"
LIST_FAILED = "Failed to fetch users"


class UserService:
    """Service for creating and listing users.

    Every method opens its own connection; the database is the only
    state shared between requests.
    """

    @classmethod
    async def create_user_with_post(cls, body: Any) -> UserCreated:
        """Create a user and, if requested, its first post.

        ``body`` is the decoded request JSON.  Validation errors are
        raised before the database is touched.  An existing user with
        the same email raises ``ConflictError``; so does a unique
        constraint violation at write time, which happens when two
        requests for the same email pass the pre-check concurrently.
        Any other failure is logged and raised as ``InternalError``.
        Either both records are stored or neither is.
        """
        data = validate_create_request(body)
        logger.info("Creating user %s (with post: %s)", data.email, data.post is not None)
        try:
            existing = await cls.get_user_by_email(data.email)
            if existing:
                logger.info("User %s already exists (id=%s)", data.email, existing.id)
                raise ConflictError(USER_EXISTS)
            created = cls._insert(data)
        except ConflictError:
            raise
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                logger.info("Lost creation race for %s: %s", data.email, exc)
                raise ConflictError(USER_EXISTS) from exc
            logger.exception("Integrity error while creating user %s", data.email)
            raise InternalError(CREATE_FAILED) from exc
        except Exception as exc:
            logger.exception("Error creating user %s", data.email)
            raise InternalError(CREATE_FAILED) from exc
        logger.info(
            "User %s created (id=%s, post id=%s)",
            created.user.email,
            created.user.id,
            created.post.id if created.post else None,
        )
        return created

    @staticmethod
    def _insert(data: UserCreate) -> UserCreated:
        with transaction() as tx:
            cursor = tx.execute(
                "INSERT INTO users (email, name) VALUES (?, ?)",
                (data.email, data.name),
            )
            user = UserRead(id=cursor.lastrowid, email=data.email, name=data.name)
            post = None
            if data.post is not None:
                cursor = tx.execute(
                    "INSERT INTO posts (title, content, published, author_id) VALUES (?, ?, ?, ?)",
                    (data.post.title, data.post.content, 1 if data.post.published else 0, user.id),
                )
                post = PostRead(
                    id=cursor.lastrowid,
                    title=data.post.title,
                    content=data.post.content,
                    published=data.post.published,
                    author_id=user.id,
                )
        return UserCreated(user=user, post=post)

    @classmethod
    async def get_user_by_email(cls, email: str) -> Optional[UserRead]:
        """Retrieve a user by exact email."""
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, email, name FROM users WHERE email = ?",
                (email,),
            ).fetchone()
            if row:
                return UserRead(id=row["id"], email=row["email"], name=row["name"])
            return None
        finally:
            conn.close()

    @classmethod
    async def list_users(cls) -> List[UserWithPosts]:
        """Return every user with its posts, in storage order.

        Storage failures are logged and raised as ``InternalError``.
        """
        try:
            conn = get_connection()
            try:
                user_rows = conn.execute(
                    "SELECT id, email, name FROM users ORDER BY id"
                ).fetchall()
                post_rows = conn.execute(
                    "SELECT id, title, content, published, author_id FROM posts ORDER BY id"
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Error listing users")
            raise InternalError(LIST_FAILED) from exc

        posts_by_author: Dict[int, List[PostRead]] = {}
        for row in post_rows:
            posts_by_author.setdefault(row["author_id"], []).append(
                PostRead(
                    id=row["id"],
                    title=row["title"],
                    content=row["content"],
                    published=bool(row["published"]),
                    author_id=row["author_id"],
                )
            )
        return [
            UserWithPosts(
                id=row["id"],
                email=row["email"],
                name=row["name"],
                posts=posts_by_author.get(row["id"], []),
            )
            for row in user_rows
        ]

"""
Blog repository for database operations.
"""

from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class BlogRepository(BaseRepository[db_models.BlogPost]):
    """Repository for BlogPost entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.BlogPost, db)

    def list_posts(
        self, published: bool | None = None, limit: int | None = None
    ) -> list[db_models.BlogPost]:
        """
        List posts newest first.

        Args:
            published: Only published posts when True
            limit: Optional maximum number of rows
        """
        query = self.db.query(db_models.BlogPost)
        if published:
            query = query.filter(db_models.BlogPost.published.is_(True))

        query = query.order_by(
            db_models.BlogPost.created_at.desc(), db_models.BlogPost.id.desc()
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_by_slug(self, slug: str) -> db_models.BlogPost | None:
        """Get post by its unique slug."""
        return (
            self.db.query(db_models.BlogPost)
            .filter(db_models.BlogPost.slug == slug)
            .first()
        )

    def slug_exists(self, slug: str, exclude_id: int | None = None) -> bool:
        """Check whether another post already uses `slug`."""
        query = self.db.query(db_models.BlogPost.id).filter(
            db_models.BlogPost.slug == slug
        )
        if exclude_id is not None:
            query = query.filter(db_models.BlogPost.id != exclude_id)
        return query.first() is not None

    def increment_views(self, post_id: int) -> db_models.BlogPost | None:
        """
        Add one to a post's view counter in a single UPDATE statement.

        Returns:
            The refreshed post, or None if it does not exist
        """
        result = self.db.execute(
            update(db_models.BlogPost)
            .where(db_models.BlogPost.id == post_id)
            .values(views=db_models.BlogPost.views + 1)
            .execution_options(synchronize_session=False)
        )
        self.commit()
        if result.rowcount == 0:  # type: ignore[attr-defined]
            return None

        post = self.get_by_id(post_id)
        if post is not None:
            self.db.refresh(post)
        return post

    def create_post(self, **fields: Any) -> db_models.BlogPost:
        """
        Persist a new post.

        Raises:
            IntegrityError: If the slug is already taken
            StorageException: If the write fails for another reason
        """
        return self.create(db_models.BlogPost(**fields))

    def update_post(
        self, post_id: int, changes: dict[str, Any]
    ) -> db_models.BlogPost | None:
        """
        Apply a partial update.

        Returns:
            Updated post, or None if it does not exist
        """
        post = self.get_by_id(post_id)
        if post is None:
            return None
        return self.apply_changes(post, changes)

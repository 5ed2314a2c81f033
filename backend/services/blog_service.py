"""
Blog service.

Post bodies are sanitized on write. Reading a post by slug counts one view.
"""

from datetime import datetime, timezone
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from helpers.sanitization import (
    sanitize_plain_text,
    sanitize_post_html,
    sanitize_tags,
    sanitize_url,
)
from models.exceptions import (
    BlogPostNotFoundException,
    DuplicateSlugException,
    ValidationException,
)
from models.schemas import BlogPostCreate, BlogPostUpdate
from repositories.blog_repository import BlogRepository


class BlogService:
    """Service for blog-related business logic."""

    @staticmethod
    def _clean(changes: dict[str, Any]) -> dict[str, Any]:
        for field in ("slug", "published", "tags"):
            if field in changes and changes[field] is None:
                del changes[field]
        if "title" in changes:
            changes["title"] = sanitize_plain_text(changes["title"])
            if not changes["title"]:
                raise ValidationException("Title cannot be empty")
        if "content" in changes:
            changes["content"] = sanitize_post_html(changes["content"])
            if not changes["content"]:
                raise ValidationException("Content cannot be empty")
        if "excerpt" in changes:
            changes["excerpt"] = sanitize_plain_text(changes["excerpt"]) or None
        if "featured_image" in changes:
            changes["featured_image"] = sanitize_url(changes["featured_image"]) or None
        if "tags" in changes:
            changes["tags"] = sanitize_tags(changes["tags"])
        return changes

    @staticmethod
    def list_posts(
        db: Session, published: bool | None = None, limit: int | None = None
    ) -> list[db_models.BlogPost]:
        return BlogRepository(db).list_posts(published, limit)

    @staticmethod
    def read_post(db: Session, slug: str) -> db_models.BlogPost:
        """
        Fetch a post by slug and count the view.

        Raises:
            BlogPostNotFoundException: If no post has this slug
        """
        repo = BlogRepository(db)
        post = repo.get_by_slug(slug)
        if post is None:
            raise BlogPostNotFoundException()

        counted = repo.increment_views(post.id)
        if counted is None:
            # Deleted between lookup and update
            raise BlogPostNotFoundException()
        return counted

    @classmethod
    def create_post(cls, db: Session, data: BlogPostCreate) -> db_models.BlogPost:
        """
        Create a post.

        Raises:
            DuplicateSlugException: If the slug is taken
        """
        repo = BlogRepository(db)
        if repo.slug_exists(data.slug):
            raise DuplicateSlugException(data.slug)

        fields = cls._clean(data.model_dump())
        if fields["published"]:
            fields["published_at"] = datetime.now(timezone.utc)

        try:
            post = repo.create_post(**fields)
        except IntegrityError:
            raise DuplicateSlugException(data.slug)

        logger.info(f"Blog post {post.id} created: slug={post.slug}")
        return post

    @classmethod
    def update_post(
        cls, db: Session, post_id: int, data: BlogPostUpdate
    ) -> db_models.BlogPost:
        """
        Apply a partial update. published_at is set the first time a post
        is published and kept afterwards.

        Raises:
            BlogPostNotFoundException: If the post does not exist
            DuplicateSlugException: If the new slug is taken
        """
        repo = BlogRepository(db)
        post = repo.get_by_id(post_id)
        if post is None:
            raise BlogPostNotFoundException()

        changes = cls._clean(data.model_dump(exclude_unset=True))
        slug = changes.get("slug")
        if slug and repo.slug_exists(slug, exclude_id=post_id):
            raise DuplicateSlugException(slug)

        if changes.get("published") and post.published_at is None:
            changes["published_at"] = datetime.now(timezone.utc)

        try:
            post = repo.apply_changes(post, changes)
        except IntegrityError:
            raise DuplicateSlugException(slug or post.slug)

        logger.info(f"Blog post {post_id} updated: {sorted(changes)}")
        return post

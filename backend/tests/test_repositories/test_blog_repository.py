"""Tests for BlogRepository."""

import repositories.db_models as db_models
from repositories.blog_repository import BlogRepository


class TestBlogRepository:
    def test_get_by_slug(self, db_session, test_post) -> None:
        repo = BlogRepository(db_session)

        assert repo.get_by_slug("hello-world").id == test_post.id
        assert repo.get_by_slug("missing") is None

    def test_slug_exists_excludes_self(self, db_session, test_post) -> None:
        repo = BlogRepository(db_session)

        assert repo.slug_exists("hello-world") is True
        assert repo.slug_exists("hello-world", exclude_id=test_post.id) is False

    def test_increment_views(self, db_session, test_post) -> None:
        repo = BlogRepository(db_session)

        for _ in range(3):
            post = repo.increment_views(test_post.id)

        assert post.views == 3

    def test_increment_views_missing(self, db_session) -> None:
        assert BlogRepository(db_session).increment_views(404) is None

    def test_list_published_only(self, db_session, test_post) -> None:
        db_session.add(db_models.BlogPost(title="Draft", slug="draft", content="c"))
        db_session.commit()
        repo = BlogRepository(db_session)

        assert len(repo.list_posts()) == 2
        assert [p.slug for p in repo.list_posts(published=True)] == ["hello-world"]
        assert len(repo.list_posts(limit=1)) == 1

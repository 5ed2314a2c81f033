"""
Project repository for database operations.
"""

from typing import Any

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class ProjectRepository(BaseRepository[db_models.Project]):
    """Repository for Project entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.Project, db)

    def list_projects(
        self,
        featured: bool | None = None,
        status: db_models.ProjectStatus | None = None,
        limit: int | None = None,
    ) -> list[db_models.Project]:
        """
        List projects newest first.

        Args:
            featured: Only featured projects when True
            status: Optional status filter
            limit: Optional maximum number of rows

        Returns:
            List of projects
        """
        query = self.db.query(db_models.Project)
        if featured:
            query = query.filter(db_models.Project.featured.is_(True))
        if status is not None:
            query = query.filter(db_models.Project.status == status)

        query = query.order_by(
            db_models.Project.created_at.desc(), db_models.Project.id.desc()
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def create_project(self, **fields: Any) -> db_models.Project:
        """
        Persist a new project.

        Raises:
            StorageException: If the write fails
        """
        return self.create(db_models.Project(**fields))

    def update_project(
        self, project_id: int, changes: dict[str, Any]
    ) -> db_models.Project | None:
        """
        Apply a partial update.

        Returns:
            Updated project, or None if it does not exist
        """
        project = self.get_by_id(project_id)
        if project is None:
            return None
        return self.apply_changes(project, changes)

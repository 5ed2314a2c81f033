"""
Project service for portfolio project listings and admin edits.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text, sanitize_tags, sanitize_url
from models.exceptions import ProjectNotFoundException, ValidationException
from models.schemas import ProjectUpdate
from repositories.project_repository import ProjectRepository


def parse_technologies(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated technology list from a multipart form.

    Examples:
        >>> parse_technologies("Python, FastAPI,,SQL")
        ['Python', 'FastAPI', 'SQL']
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class ProjectService:
    """Service for project-related business logic."""

    @staticmethod
    def list_projects(
        db: Session,
        featured: bool | None = None,
        status: db_models.ProjectStatus | None = None,
        limit: int | None = None,
    ) -> list[db_models.Project]:
        return ProjectRepository(db).list_projects(featured, status, limit)

    @staticmethod
    def clean_required_fields(title: str, description: str) -> tuple[str, str]:
        """Sanitize title and description; both must be non-empty."""
        clean_title = sanitize_plain_text(title)
        clean_description = sanitize_plain_text(description)
        if not clean_title or not clean_description:
            raise ValidationException("Title and description are required")
        return clean_title, clean_description

    @staticmethod
    def create_project(
        db: Session,
        title: str,
        description: str,
        technologies: List[str],
        github_url: str | None = None,
        live_url: str | None = None,
        featured: bool = False,
        status: db_models.ProjectStatus = db_models.ProjectStatus.PLANNING,
        image: str | None = None,
    ) -> db_models.Project:
        """
        Create a project.

        Raises:
            ValidationException: If title or description is empty after cleaning
            StorageException: If the write fails
        """
        clean_title, clean_description = ProjectService.clean_required_fields(
            title, description
        )

        project = ProjectRepository(db).create_project(
            title=clean_title,
            description=clean_description,
            technologies=sanitize_tags(technologies),
            github_url=sanitize_url(github_url) or None,
            live_url=sanitize_url(live_url) or None,
            featured=featured,
            status=status,
            image=image,
        )
        logger.info(f"Project {project.id} created: {project.title!r}")
        return project

    @staticmethod
    def update_project(
        db: Session, project_id: int, data: ProjectUpdate
    ) -> db_models.Project:
        """
        Apply a partial update.

        Raises:
            ProjectNotFoundException: If the project does not exist
        """
        changes = data.model_dump(exclude_unset=True)
        for field in ("technologies", "featured", "status"):
            if field in changes and changes[field] is None:
                del changes[field]
        for field in ("title", "description"):
            if field in changes:
                changes[field] = sanitize_plain_text(changes[field])
                if not changes[field]:
                    raise ValidationException(f"{field.capitalize()} cannot be empty")
        for field in ("github_url", "live_url"):
            if field in changes:
                changes[field] = sanitize_url(changes[field]) or None
        if "technologies" in changes:
            changes["technologies"] = sanitize_tags(changes["technologies"])

        project = ProjectRepository(db).update_project(project_id, changes)
        if project is None:
            raise ProjectNotFoundException()
        logger.info(f"Project {project_id} updated: {sorted(changes)}")
        return project

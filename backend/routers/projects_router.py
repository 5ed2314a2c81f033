"""Projects router: public listing and admin edits."""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import ListLimit
from helpers.rate_limiter import general_limit
from repositories.database import get_db
from services.project_service import ProjectService, parse_technologies
from services.upload_service import UploadService
from services.visitor_service import VisitorTracker, get_visitor_tracker

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[schemas.Project])
@general_limit
def list_projects(
    request: Request,
    featured: Optional[bool] = None,
    project_status: Optional[db_models.ProjectStatus] = Query(None, alias="status"),
    limit: ListLimit = None,
    db: Session = Depends(get_db),
    tracker: VisitorTracker = Depends(get_visitor_tracker),
) -> List[schemas.Project]:
    """List projects newest first; `featured=true` keeps featured ones only."""
    tracker.track_request(request)
    projects = ProjectService.list_projects(db, featured, project_status, limit)
    return [schemas.Project.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=schemas.ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
@general_limit
def create_project(
    request: Request,
    title: str = Form(...),
    description: str = Form(...),
    technologies: str = Form(""),
    github_url: Optional[str] = Form(None),
    live_url: Optional[str] = Form(None),
    featured: bool = Form(False),
    project_status: db_models.ProjectStatus = Form(
        db_models.ProjectStatus.PLANNING, alias="status"
    ),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.ProjectMutationResponse:
    """
    Create a project from a multipart form with an optional `image` file.

    Raises:
        ValidationException: 400 if title or description is blank
        UploadException: 400 if the image is too large or not an allowed type
    """
    # Reject bad fields before anything is written to disk
    ProjectService.clean_required_fields(title, description)
    image_url = UploadService.save_image(image) if image and image.filename else None

    project = ProjectService.create_project(
        db,
        title=title,
        description=description,
        technologies=parse_technologies(technologies),
        github_url=github_url,
        live_url=live_url,
        featured=featured,
        status=project_status,
        image=image_url,
    )
    return schemas.ProjectMutationResponse(
        message="Project created successfully",
        project=schemas.Project.model_validate(project),
    )


@router.patch("/{project_id}", response_model=schemas.ProjectMutationResponse)
@general_limit
def update_project(
    request: Request,
    project_id: int,
    update: schemas.ProjectUpdate,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.ProjectMutationResponse:
    """
    Partially update a project.

    Raises:
        ProjectNotFoundException: 404 if the project does not exist
    """
    project = ProjectService.update_project(db, project_id, update)
    return schemas.ProjectMutationResponse(
        message="Project updated successfully",
        project=schemas.Project.model_validate(project),
    )

"""Blog router: public reading and admin authoring."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
from helpers.pagination import ListLimit
from helpers.rate_limiter import general_limit
from repositories.database import get_db
from services.blog_service import BlogService
from services.visitor_service import VisitorTracker, get_visitor_tracker

router = APIRouter(prefix="/blog", tags=["blog"])


@router.get("", response_model=List[schemas.BlogPostSummary])
@general_limit
def list_posts(
    request: Request,
    published: Optional[bool] = None,
    limit: ListLimit = None,
    db: Session = Depends(get_db),
    tracker: VisitorTracker = Depends(get_visitor_tracker),
) -> List[schemas.BlogPostSummary]:
    """List posts newest first without their bodies."""
    tracker.track_request(request)
    posts = BlogService.list_posts(db, published, limit)
    return [schemas.BlogPostSummary.model_validate(p) for p in posts]


@router.get("/{slug}", response_model=schemas.BlogPost)
@general_limit
def get_post(
    request: Request,
    slug: str,
    db: Session = Depends(get_db),
    tracker: VisitorTracker = Depends(get_visitor_tracker),
) -> schemas.BlogPost:
    """
    Read a post and count one view.

    Raises:
        BlogPostNotFoundException: 404 if no post has this slug
    """
    tracker.track_request(request)
    post = BlogService.read_post(db, slug)
    return schemas.BlogPost.model_validate(post)


@router.post(
    "",
    response_model=schemas.BlogMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
@general_limit
def create_post(
    request: Request,
    data: schemas.BlogPostCreate,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.BlogMutationResponse:
    """
    Create a post.

    Raises:
        DuplicateSlugException: 409 if the slug is taken
    """
    post = BlogService.create_post(db, data)
    return schemas.BlogMutationResponse(
        message="Blog post created successfully",
        post=schemas.BlogPost.model_validate(post),
    )


@router.patch("/{post_id}", response_model=schemas.BlogMutationResponse)
@general_limit
def update_post(
    request: Request,
    post_id: int,
    data: schemas.BlogPostUpdate,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.BlogMutationResponse:
    """
    Partially update a post.

    Raises:
        BlogPostNotFoundException: 404 if the post does not exist
        DuplicateSlugException: 409 if the new slug is taken
    """
    post = BlogService.update_post(db, post_id, data)
    return schemas.BlogMutationResponse(
        message="Blog post updated successfully",
        post=schemas.BlogPost.model_validate(post),
    )

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from repositories.db_models import AdminRole, ContactStatus, ProjectStatus

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# Contact Schemas
class ContactFormRequest(BaseModel):
    """Raw contact form body.

    Fields are optional here so a missing field reaches ContactValidator and
    produces the uniform "All fields are required" error.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class ValidatedContact(BaseModel):
    """Contact form after trimming and email normalization."""

    name: str
    email: str
    subject: str
    message: str


class ContactFormResponse(BaseModel):
    message: str


class ContactSubmission(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    status: ContactStatus
    created_at: datetime
    read_at: Optional[datetime] = None
    replied_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContactSummary(BaseModel):
    id: int
    name: str
    email: str
    subject: str
    status: ContactStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactListResponse(BaseModel):
    contacts: List[ContactSubmission]
    total_pages: int
    current_page: int
    total_contacts: int


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class ContactStatusUpdateResponse(BaseModel):
    message: str
    contact: ContactSubmission


# Admin / Auth Schemas
class AdminLoginRequest(BaseModel):
    username: str
    password: str


class AdminUser(BaseModel):
    id: int
    username: str
    email: str
    role: AdminRole

    model_config = ConfigDict(from_attributes=True)


class AdminLoginResponse(BaseModel):
    message: str
    token: str
    user: AdminUser


class TokenIdentity(BaseModel):
    """Claims carried by a verified bearer token."""

    id: int
    username: str
    role: AdminRole


# Project Schemas
class Project(BaseModel):
    id: int
    title: str
    description: str
    image: Optional[str] = None
    technologies: List[str] = []
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: bool
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = Field(default=None, max_length=500)
    live_url: Optional[str] = Field(default=None, max_length=500)
    featured: Optional[bool] = None
    status: Optional[ProjectStatus] = None


class ProjectMutationResponse(BaseModel):
    message: str
    project: Project


# Blog Schemas
class BlogPostSummary(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: List[str] = []
    published: bool
    views: int
    likes: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BlogPost(BlogPostSummary):
    content: str
    updated_at: datetime
    published_at: Optional[datetime] = None


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    slug: str = Field(..., min_length=1, max_length=200, pattern=SLUG_PATTERN)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = Field(default=None, max_length=500)
    tags: List[str] = []
    published: bool = False


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    slug: Optional[str] = Field(
        default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN
    )
    content: Optional[str] = Field(default=None, min_length=1)
    excerpt: Optional[str] = None
    featured_image: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[List[str]] = None
    published: Optional[bool] = None


class BlogMutationResponse(BaseModel):
    message: str
    post: BlogPost


# Analytics Schemas
class DailyCount(BaseModel):
    date: str
    count: int


class StatusCount(BaseModel):
    status: ContactStatus
    count: int


class AnalyticsResponse(BaseModel):
    total_visitors: int
    total_contacts: int
    recent_contacts: List[ContactSummary]
    visitor_stats: List[DailyCount]
    contact_stats: List[StatusCount]


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str


class ErrorResponse(BaseModel):
    detail: str
    correlation_id: Optional[str] = None

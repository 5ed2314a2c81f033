"""
Repository pattern implementation for data access layer.
"""

from .admin_repository import AdminRepository
from .base import BaseRepository
from .blog_repository import BlogRepository
from .contact_repository import ContactRepository
from .project_repository import ProjectRepository
from .visitor_repository import VisitorRepository

__all__ = [
    "AdminRepository",
    "BaseRepository",
    "BlogRepository",
    "ContactRepository",
    "ProjectRepository",
    "VisitorRepository",
]

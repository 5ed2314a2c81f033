"""
Service layer for business logic.
"""

from .analytics_service import AnalyticsService
from .auth_service import AuthService
from .blog_service import BlogService
from .contact_service import ContactService
from .contact_validation import ContactValidator
from .notification_service import ContactNotifier
from .project_service import ProjectService
from .upload_service import UploadService
from .visitor_service import VisitorTracker

__all__ = [
    "AnalyticsService",
    "AuthService",
    "BlogService",
    "ContactNotifier",
    "ContactService",
    "ContactValidator",
    "ProjectService",
    "UploadService",
    "VisitorTracker",
]

"""
Application services layer.

Services orchestrate business operations using repositories and domain services.
"""

from services.announcement_service import AnnouncementService
from services.enrollment_service import EnrollmentService
from services.result import Result
from services.session_admin_service import SessionAdminService
from services.team_service import TeamService

__all__ = [
    "AnnouncementService",
    "EnrollmentService",
    "SessionAdminService",
    "TeamService",
    # Result type
    "Result",
]

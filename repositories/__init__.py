"""
Repository layer for data access abstraction.
"""

from repositories.announcement_repository import AnnouncementRepository
from repositories.interfaces import IAnnouncementRepository, ISessionRepository
from repositories.session_repository import SessionRepository

__all__ = [
    "AnnouncementRepository",
    "SessionRepository",
    "IAnnouncementRepository",
    "ISessionRepository",
]

"""
In-memory repository for announcements.
"""

from domain.models.announcement import Announcement
from repositories.interfaces import IAnnouncementRepository


class AnnouncementRepository(IAnnouncementRepository):
    def __init__(self):
        self._announcements: dict[str, Announcement] = {}

    def add(self, announcement: Announcement) -> None:
        self._announcements[announcement.announcement_id] = announcement

    def get_by_id(self, announcement_id: str) -> Announcement | None:
        return self._announcements.get(announcement_id)

    def get_all(self) -> list[Announcement]:
        """All announcements, newest first."""
        return sorted(self._announcements.values(), key=lambda a: a.created_at, reverse=True)

    def delete(self, announcement_id: str) -> bool:
        return self._announcements.pop(announcement_id, None) is not None

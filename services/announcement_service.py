"""
Club announcements and their AI digest.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Callable
from datetime import datetime

from domain.models.announcement import Announcement
from repositories.interfaces import IAnnouncementRepository
from services import error_codes
from services.ai_service import AIService
from services.enrollment_service import utc_now
from services.result import Result

logger = logging.getLogger("spiketime.services.announcement")


class AnnouncementService:
    def __init__(
        self,
        announcement_repo: IAnnouncementRepository,
        ai_service: AIService | None = None,
        clock: Callable[[], datetime] = utc_now,
        lock: threading.RLock | None = None,
    ):
        self.announcement_repo = announcement_repo
        self.ai_service = ai_service
        self.clock = clock
        self._lock = lock or threading.RLock()

    @staticmethod
    def _validate(title: str, content: str) -> Result[None]:
        if not title or not title.strip():
            return Result.fail("Announcement title is required", code=error_codes.VALIDATION_ERROR)
        if not content or not content.strip():
            return Result.fail("Announcement content is required", code=error_codes.VALIDATION_ERROR)
        return Result.ok()

    def create_announcement(self, title: str, content: str) -> Result[Announcement]:
        check = self._validate(title, content)
        if not check:
            return check
        announcement = Announcement(
            announcement_id=uuid.uuid4().hex[:12],
            title=title.strip(),
            content=content.strip(),
            created_at=self.clock(),
        )
        with self._lock:
            self.announcement_repo.add(announcement)
        logger.info(f"Announcement {announcement.announcement_id} created")
        return Result.ok(announcement)

    def update_announcement(self, announcement_id: str, title: str, content: str) -> Result[Announcement]:
        with self._lock:
            announcement = self.announcement_repo.get_by_id(announcement_id)
            if announcement is None:
                return Result.fail("Announcement not found", code=error_codes.ANNOUNCEMENT_NOT_FOUND)
            check = self._validate(title, content)
            if not check:
                return check
            announcement.title = title.strip()
            announcement.content = content.strip()
        return Result.ok(announcement)

    def delete_announcement(self, announcement_id: str) -> Result[None]:
        with self._lock:
            if not self.announcement_repo.delete(announcement_id):
                return Result.fail("Announcement not found", code=error_codes.ANNOUNCEMENT_NOT_FOUND)
        logger.info(f"Announcement {announcement_id} deleted")
        return Result.ok()

    def list_announcements(self) -> list[Announcement]:
        with self._lock:
            return self.announcement_repo.get_all()

    async def summarize_recent(self, limit: int = 5) -> Result[str]:
        """Digest of the ``limit`` newest announcements from the advisor."""
        recent = self.list_announcements()[:limit]
        if not recent:
            return Result.ok("")
        if self.ai_service is None:
            return Result.fail("Announcement summaries are not configured", code=error_codes.ADVISOR_UNAVAILABLE)

        summary = await self.ai_service.summarize_announcements(
            "\n".join(a.to_digest_line() for a in recent)
        )
        if not summary:
            return Result.fail("Could not summarize announcements right now", code=error_codes.ADVISOR_UNAVAILABLE)
        return Result.ok(summary.strip())

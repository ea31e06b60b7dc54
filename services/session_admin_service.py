"""
Admin-side session management: create, edit, delete, level suggestions.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime

from domain.models.player import SkillLevel
from domain.models.session import Session, validate_schedule
from repositories.interfaces import ISessionRepository
from services import error_codes
from services.ai_service import AIService
from services.result import Result

logger = logging.getLogger("spiketime.services.session_admin")

EDITABLE_FIELDS = {"capacity", "start_time", "end_time", "location", "level"}


class SessionAdminService:
    """Session lifecycle for admins. Membership changes go through EnrollmentService."""

    def __init__(
        self,
        session_repo: ISessionRepository,
        lock: threading.RLock | None = None,
        ai_service: AIService | None = None,
        default_capacity: int = 12,
    ):
        self.session_repo = session_repo
        self._lock = lock or threading.RLock()
        self.ai_service = ai_service
        self.default_capacity = default_capacity

    def create_session(
        self,
        start_time: datetime,
        end_time: datetime | None = None,
        capacity: int | None = None,
        location: str = "",
        level: SkillLevel | str | None = None,
        created_by: str | None = None,
    ) -> Result[Session]:
        try:
            session = Session(
                session_id=uuid.uuid4().hex[:12],
                capacity=capacity if capacity is not None else self.default_capacity,
                start_time=start_time,
                end_time=end_time,
                location=location,
                level=SkillLevel.parse(level) if level is not None else None,
                created_by=created_by,
            )
        except ValueError as e:
            return Result.fail(str(e), code=error_codes.VALIDATION_ERROR)

        with self._lock:
            self.session_repo.add(session)
        logger.info(f"Session {session.session_id} created by {created_by} (capacity {session.capacity})")
        return Result.ok(session)

    def update_session(self, session_id: str, **changes) -> Result[Session]:
        """
        Edit session details. Membership lists cannot be edited here, and the
        capacity can never drop below the number of players already booked.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            return Result.fail(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                code=error_codes.VALIDATION_ERROR,
            )

        with self._lock:
            session = self.session_repo.get_by_id(session_id)
            if session is None:
                return Result.fail(f"Session {session_id} not found", code=error_codes.SESSION_NOT_FOUND)

            capacity = changes.get("capacity", session.capacity)
            start_time = changes.get("start_time", session.start_time)
            end_time = changes.get("end_time", session.end_time)
            try:
                validate_schedule(capacity, start_time, end_time)
            except ValueError as e:
                return Result.fail(str(e), code=error_codes.VALIDATION_ERROR)
            if capacity < len(session.enrolled):
                return Result.fail(
                    f"Capacity {capacity} is below the {len(session.enrolled)} players already booked",
                    code=error_codes.VALIDATION_ERROR,
                )
            level = changes.get("level", session.level)
            try:
                level = SkillLevel.parse(level) if level is not None else None
            except ValueError as e:
                return Result.fail(str(e), code=error_codes.VALIDATION_ERROR)

            session.capacity = capacity
            session.start_time = start_time
            session.end_time = end_time
            session.level = level
            session.location = changes.get("location", session.location)

        logger.info(f"Session {session_id} updated: {', '.join(sorted(changes)) or 'no changes'}")
        return Result.ok(session)

    def delete_session(self, session_id: str) -> Result[None]:
        """Hard delete; booked and waitlisted players simply lose the session."""
        with self._lock:
            if not self.session_repo.delete(session_id):
                return Result.fail(f"Session {session_id} not found", code=error_codes.SESSION_NOT_FOUND)
        logger.info(f"Session {session_id} deleted")
        return Result.ok()

    async def suggest_session_level(self, session_id: str) -> Result[dict]:
        """
        Ask the advisor what level fits the players booked into the session.

        Returns:
            Result.ok({"suggested_level": SkillLevel, "reasoning": str})
        """
        with self._lock:
            session = self.session_repo.get_by_id(session_id)
            if session is None:
                return Result.fail(f"Session {session_id} not found", code=error_codes.SESSION_NOT_FOUND)
            levels = [p.skill_level.name.lower() for p in session.enrolled]

        if self.ai_service is None:
            return Result.fail("Session level advisor is not configured", code=error_codes.ADVISOR_UNAVAILABLE)

        suggestion = await self.ai_service.suggest_session_level(levels)
        if "error" in suggestion:
            return Result.fail(suggestion["error"], code=error_codes.ADVISOR_UNAVAILABLE)
        try:
            level = SkillLevel.parse(suggestion["suggested_level"])
        except ValueError as e:
            return Result.fail(str(e), code=error_codes.INVALID_ADVISOR_RESPONSE)
        return Result.ok({"suggested_level": level, "reasoning": suggestion.get("reasoning", "")})

"""
Session enrollment: booking, cancellation and the waitlist.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from config import CANCELLATION_WINDOW_HOURS
from domain.models.player import Player
from domain.models.session import EnrollmentStatus, Session
from repositories.interfaces import ISessionRepository
from services import error_codes
from services.result import Result

logger = logging.getLogger("spiketime.services.enrollment")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EnrollmentService:
    """
    The only writer of session membership.

    Each operation holds the service lock, checks all of its guards first and
    then applies at most one transition, so callers never observe a half-applied
    change. Cancelling a booking does not promote anyone from the waitlist;
    a waitlisted player promotes themselves by calling ``book`` once a slot is free.
    """

    def __init__(
        self,
        session_repo: ISessionRepository,
        clock: Callable[[], datetime] = utc_now,
        visibility_grace: timedelta = timedelta(minutes=60),
        lock: threading.RLock | None = None,
    ):
        """
        Args:
            session_repo: Store that owns the sessions
            clock: Returns the current time; read on every cancel
            visibility_grace: How long after its end a session stays listed
            lock: Lock shared with other writers of the same store
        """
        self.session_repo = session_repo
        self.clock = clock
        self.visibility_grace = visibility_grace
        self._lock = lock or threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def _get_session(self, session_id: str) -> Result[Session]:
        session = self.session_repo.get_by_id(session_id)
        if session is None:
            return Result.fail(f"Session {session_id} not found", code=error_codes.SESSION_NOT_FOUND)
        return Result.ok(session)

    def get_status(self, session_id: str, player_id: str) -> Result[EnrollmentStatus]:
        with self._lock:
            found = self._get_session(session_id)
            if not found:
                return found
            return Result.ok(found.value.status_of(player_id))

    def book(self, session_id: str, player: Player) -> Result[Session]:
        """
        Take a slot in the session.

        A waitlisted player booking while a slot is free is moved off the
        waitlist into the enrolled list (manual promotion).
        """
        with self._lock:
            found = self._get_session(session_id)
            if not found:
                return found
            session = found.value
            status = session.status_of(player.id)

            if status == EnrollmentStatus.ENROLLED:
                logger.debug(f"{player.id} already booked into {session_id}")
                return Result.fail("You are already booked into this session", code=error_codes.ALREADY_REGISTERED)
            if session.is_full():
                if status == EnrollmentStatus.WAITLISTED:
                    return Result.fail("You are already on the waitlist", code=error_codes.ALREADY_WAITLISTED)
                logger.debug(f"{player.id} rejected from full session {session_id}")
                return Result.fail("This session is full", code=error_codes.SESSION_FULL)

            if status == EnrollmentStatus.WAITLISTED:
                session.remove_from_waitlist(player.id)
                logger.info(f"{player.id} promoted from waitlist into {session_id}")
            session.add_player(player)
            logger.info(
                f"{player.id} booked into {session_id} ({len(session.enrolled)}/{session.capacity})"
            )
            return Result.ok(session)

    def cancel(self, session_id: str, player_id: str) -> Result[Session]:
        """Give up a booked slot; only allowed more than 12 hours before start."""
        with self._lock:
            found = self._get_session(session_id)
            if not found:
                return found
            session = found.value

            if session.status_of(player_id) != EnrollmentStatus.ENROLLED:
                return Result.fail("You are not booked into this session", code=error_codes.NOT_ENROLLED)

            hours_left = session.hours_until_start(self.clock())
            if hours_left <= CANCELLATION_WINDOW_HOURS:
                logger.debug(f"{player_id} cancel refused for {session_id}: {hours_left:.1f}h left")
                return Result.fail(
                    f"Bookings can only be cancelled more than {CANCELLATION_WINDOW_HOURS} hours before the session",
                    code=error_codes.CANCELLATION_WINDOW_CLOSED,
                )

            session.remove_player(player_id)
            logger.info(
                f"{player_id} cancelled {session_id} ({len(session.enrolled)}/{session.capacity}, "
                f"{len(session.waitlist)} waiting)"
            )
            return Result.ok(session)

    def join_waitlist(self, session_id: str, player: Player) -> Result[Session]:
        with self._lock:
            found = self._get_session(session_id)
            if not found:
                return found
            session = found.value
            status = session.status_of(player.id)

            if status == EnrollmentStatus.ENROLLED:
                return Result.fail("You are already booked into this session", code=error_codes.ALREADY_REGISTERED)
            if status == EnrollmentStatus.WAITLISTED:
                return Result.fail("You are already on the waitlist", code=error_codes.ALREADY_WAITLISTED)

            session.add_to_waitlist(player)
            logger.info(f"{player.id} joined waitlist for {session_id} (position {len(session.waitlist)})")
            return Result.ok(session)

    def leave_waitlist(self, session_id: str, player_id: str) -> Result[Session]:
        with self._lock:
            found = self._get_session(session_id)
            if not found:
                return found
            session = found.value

            if not session.remove_from_waitlist(player_id):
                return Result.fail("You are not on the waitlist", code=error_codes.NOT_WAITLISTED)
            logger.info(f"{player_id} left waitlist for {session_id}")
            return Result.ok(session)

    # -- Listings --

    def visible_sessions(self, now: datetime | None = None) -> list[Session]:
        """Sessions that have not been over for longer than the visibility grace period."""
        now = now or self.clock()
        with self._lock:
            return [s for s in self.session_repo.get_all() if s.is_visible(now, self.visibility_grace)]

    def _is_upcoming(self, session: Session, now: datetime) -> bool:
        return session.start_time.date() >= now.date()

    def upcoming_sessions_for(self, player_id: str, now: datetime | None = None) -> list[Session]:
        """Sessions from today on that the player is booked into or waitlisted for."""
        now = now or self.clock()
        return [
            s
            for s in self.visible_sessions(now)
            if self._is_upcoming(s, now) and s.status_of(player_id) != EnrollmentStatus.NONE
        ]

    def available_sessions_for(self, player_id: str, now: datetime | None = None) -> list[Session]:
        """Sessions from today on that the player has no involvement in yet."""
        now = now or self.clock()
        return [
            s
            for s in self.visible_sessions(now)
            if self._is_upcoming(s, now) and s.status_of(player_id) == EnrollmentStatus.NONE
        ]

"""
Pytest fixtures for tests.

Centralized constants and fixtures to reduce duplication across the test suite.
All time-dependent services get a pinned clock so cancellation-window tests do
not depend on when the suite runs.
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from domain.models.player import Player, SkillLevel
from domain.models.session import Session
from repositories.announcement_repository import AnnouncementRepository
from repositories.session_repository import SessionRepository
from services.enrollment_service import EnrollmentService
from services.session_admin_service import SessionAdminService


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

FIXED_NOW = datetime(2026, 3, 14, 9, 0, tzinfo=timezone.utc)
"""The pinned 'current time' used by clock fixtures."""


class FakeClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_player(index: int, skill: SkillLevel = SkillLevel.INTERMEDIATE) -> Player:
    return Player(id=f"user-{index}", name=f"Player{index}", skill_level=skill)


def make_session(
    session_id: str = "session-1",
    capacity: int = 12,
    hours_from_now: float = 48,
    now: datetime = FIXED_NOW,
) -> Session:
    start = now + timedelta(hours=hours_from_now)
    return Session(
        session_id=session_id,
        capacity=capacity,
        start_time=start,
        end_time=start + timedelta(hours=2),
        location="Main Hall",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_players():
    """Twelve players: 4 Advanced, 4 Intermediate, 4 Beginner, interleaved."""
    skills = [SkillLevel.ADVANCED, SkillLevel.INTERMEDIATE, SkillLevel.BEGINNER]
    return [make_player(i, skills[i % 3]) for i in range(12)]


@pytest.fixture
def session_repo():
    return SessionRepository()


@pytest.fixture
def announcement_repo():
    return AnnouncementRepository()


@pytest.fixture
def session_lock():
    return threading.RLock()


@pytest.fixture
def enrollment_service(session_repo, clock, session_lock):
    return EnrollmentService(session_repo=session_repo, clock=clock, lock=session_lock)


@pytest.fixture
def admin_service(session_repo, session_lock):
    return SessionAdminService(session_repo=session_repo, lock=session_lock)

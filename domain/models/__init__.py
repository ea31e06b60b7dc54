"""
Domain models - pure data structures representing business entities.
"""

from domain.models.announcement import Announcement
from domain.models.player import Player, SkillLevel
from domain.models.session import EnrollmentStatus, Session
from domain.models.team import TeamSplit, skill_total

__all__ = [
    "Announcement",
    "EnrollmentStatus",
    "Player",
    "Session",
    "SkillLevel",
    "TeamSplit",
    "skill_total",
]

"""
Session domain model.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from domain.models.player import Player, SkillLevel


class EnrollmentStatus(str, Enum):
    """Where a player stands for one session."""

    NONE = "none"
    ENROLLED = "enrolled"
    WAITLISTED = "waitlisted"


def validate_schedule(capacity: int, start_time: datetime, end_time: datetime | None) -> None:
    """
    Check the admin-editable fields that every Session must satisfy.

    Raises:
        ValueError: If capacity is not a positive int, a time is naive,
                    or the session ends before it starts
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise ValueError(f"Session capacity must be a whole number, got {capacity!r}")
    if capacity <= 0:
        raise ValueError("Session capacity must be greater than zero")
    if not isinstance(start_time, datetime) or start_time.tzinfo is None:
        raise ValueError("Session start time must be a timezone-aware datetime")
    if end_time is not None:
        if not isinstance(end_time, datetime) or end_time.tzinfo is None:
            raise ValueError("Session end time must be a timezone-aware datetime")
        if end_time < start_time:
            raise ValueError("Session cannot end before it starts")


@dataclass
class Session:
    """Represents a bookable club session with a capacity and a FIFO waitlist."""

    session_id: str
    capacity: int
    start_time: datetime
    end_time: datetime | None = None
    location: str = ""
    level: SkillLevel | None = None
    created_by: str | None = None
    enrolled: list[Player] = field(default_factory=list)
    waitlist: list[Player] = field(default_factory=list)

    def __post_init__(self):
        validate_schedule(self.capacity, self.start_time, self.end_time)

    def status_of(self, player_id: str) -> EnrollmentStatus:
        if any(p.id == player_id for p in self.enrolled):
            return EnrollmentStatus.ENROLLED
        if any(p.id == player_id for p in self.waitlist):
            return EnrollmentStatus.WAITLISTED
        return EnrollmentStatus.NONE

    def is_full(self) -> bool:
        return len(self.enrolled) >= self.capacity

    def open_slots(self) -> int:
        return max(0, self.capacity - len(self.enrolled))

    def add_player(self, player: Player) -> bool:
        """Append a player to the enrolled list if there is room and they are not in it."""
        if self.is_full():
            return False
        if self.status_of(player.id) == EnrollmentStatus.ENROLLED:
            return False
        self.enrolled.append(player)
        return True

    def remove_player(self, player_id: str) -> bool:
        for index, player in enumerate(self.enrolled):
            if player.id == player_id:
                del self.enrolled[index]
                return True
        return False

    def add_to_waitlist(self, player: Player) -> bool:
        """Append to the back of the waitlist. Enrolled or queued players are rejected."""
        if self.status_of(player.id) != EnrollmentStatus.NONE:
            return False
        self.waitlist.append(player)
        return True

    def remove_from_waitlist(self, player_id: str) -> bool:
        for index, player in enumerate(self.waitlist):
            if player.id == player_id:
                del self.waitlist[index]
                return True
        return False

    def hours_until_start(self, now: datetime) -> float:
        return (self.start_time - now).total_seconds() / 3600

    def is_visible(self, now: datetime, grace: timedelta) -> bool:
        """Sessions stay listed until ``grace`` after they end (or start, with no end time)."""
        ends_at = self.end_time or self.start_time
        return now < ends_at + grace

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "capacity": self.capacity,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "location": self.location,
            "level": self.level.label if self.level else None,
            "created_by": self.created_by,
            "enrolled": [p.id for p in self.enrolled],
            "waitlist": [p.id for p in self.waitlist],
        }

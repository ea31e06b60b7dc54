"""
Announcement domain model.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Announcement:
    """A club-wide notice posted by an admin."""

    announcement_id: str
    title: str
    content: str
    created_at: datetime

    def to_digest_line(self) -> str:
        return f"[{self.created_at.date().isoformat()}] {self.title}: {self.content}"

"""
Player domain model.
"""

from dataclasses import dataclass
from enum import Enum


class SkillLevel(Enum):
    """
    Club skill levels.

    The value is the ordinal used for balancing, so comparisons never depend on
    the label text.
    """

    BEGINNER = 1
    INTERMEDIATE = 2
    ADVANCED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, raw: "str | SkillLevel") -> "SkillLevel":
        """
        Parse a skill level label in any case ("advanced", "Advanced").

        Raises:
            ValueError: If the label is not a known skill level
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls[str(raw).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown skill level: {raw!r}") from None

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Player:
    """
    Represents a club member as seen by balancing and booking.

    This is a pure domain model with no infrastructure dependencies. Records
    are owned by the user directory; the core never mutates them.
    """

    id: str
    name: str
    skill_level: SkillLevel = SkillLevel.BEGINNER

    def get_value(self) -> int:
        """Ordinal skill value used for team balancing (Beginner=1 .. Advanced=3)."""
        return self.skill_level.value

    def to_advisor_dict(self) -> dict:
        """Serialize only the fields the team advisor is allowed to see."""
        return {"id": self.id, "name": self.name, "skillLevel": self.skill_level.label}

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        skill = data.get("skill_level", data.get("skillLevel", SkillLevel.BEGINNER))
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            skill_level=SkillLevel.parse(skill),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.skill_level.label})"

"""
Team domain model.
"""

from dataclasses import dataclass

from domain.models.player import Player


def skill_total(players: list[Player]) -> int:
    """Sum of ordinal skill values for a group of players."""
    return sum(player.get_value() for player in players)


@dataclass
class TeamSplit:
    """
    Two teams produced by a single balancing call.

    Created fresh for every call and never persisted. ``rationale`` is only set
    when the split came from the team advisor.
    """

    team_a: list[Player]
    team_b: list[Player]
    rationale: str | None = None

    @property
    def team_a_value(self) -> int:
        return skill_total(self.team_a)

    @property
    def team_b_value(self) -> int:
        return skill_total(self.team_b)

    @property
    def skill_spread(self) -> int:
        """Absolute difference between the two teams' skill totals."""
        return abs(self.team_a_value - self.team_b_value)

    def all_players(self) -> list[Player]:
        return self.team_a + self.team_b

    def to_dict(self) -> dict:
        return {
            "team_a": [p.id for p in self.team_a],
            "team_b": [p.id for p in self.team_b],
            "rationale": self.rationale,
            "skill_spread": self.skill_spread,
        }

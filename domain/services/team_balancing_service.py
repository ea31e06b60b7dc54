"""
Team balancing domain service.

Splits an even roster into two equal-sized teams and validates splits proposed
by the team advisor.
"""

import random
from collections.abc import Sequence

from domain.models.player import Player
from domain.models.team import TeamSplit


class RosterSizeError(ValueError):
    """Roster cannot be split into two equal teams."""


class PartitionError(ValueError):
    """Proposed split is not an exact two-way partition of the roster."""


class TeamBalancingService:
    """
    Pure domain service for team balancing logic.

    Responsibilities:
    - Skill-alternation split (deterministic)
    - Fisher-Yates shuffle split (uniformly random)
    - Validation of externally proposed splits
    """

    def __init__(self, rng: random.Random | None = None):
        """
        Initialize team balancing service.

        Args:
            rng: Random source for shuffled splits. Tests pass a seeded
                 ``random.Random``; defaults to a fresh unseeded instance.
        """
        self.rng = rng or random.Random()

    @staticmethod
    def validate_roster_size(players: Sequence[Player]) -> None:
        """
        Raises:
            RosterSizeError: If the roster is empty or has an odd number of players
        """
        count = len(players)
        if count < 2 or count % 2 != 0:
            raise RosterSizeError(
                f"Roster must have an even number of players (at least 2), got {count}"
            )

    def balance_deterministic(self, players: Sequence[Player]) -> TeamSplit:
        """
        Sort by skill (Advanced first) and deal players alternately into A and B.

        ``sorted`` is stable, so equal-skill players keep their input order and
        the same input always yields the same split.
        """
        self.validate_roster_size(players)
        ordered = sorted(players, key=lambda p: p.get_value(), reverse=True)
        return TeamSplit(team_a=ordered[0::2], team_b=ordered[1::2])

    def balance_random(self, players: Sequence[Player]) -> TeamSplit:
        """Shuffle uniformly (Fisher-Yates) and split at the midpoint."""
        self.validate_roster_size(players)
        shuffled = list(players)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        midpoint = len(shuffled) // 2
        return TeamSplit(team_a=shuffled[:midpoint], team_b=shuffled[midpoint:])

    def validate_partition(
        self,
        players: Sequence[Player],
        team_a_ids: Sequence[str],
        team_b_ids: Sequence[str],
        rationale: str | None = None,
    ) -> TeamSplit:
        """
        Turn two id groups into a TeamSplit, rejecting anything that is not an
        exact half/half partition of ``players``. The groups are never repaired.

        Raises:
            RosterSizeError: If the roster itself is not splittable
            PartitionError: If the groups are the wrong size, overlap, repeat ids,
                            or do not cover exactly the roster
        """
        self.validate_roster_size(players)
        half = len(players) // 2
        by_id = {p.id: p for p in players}

        team_a_ids = [str(i) for i in team_a_ids]
        team_b_ids = [str(i) for i in team_b_ids]

        if len(team_a_ids) != half or len(team_b_ids) != half:
            raise PartitionError(
                f"Each team must have exactly {half} players "
                f"(got {len(team_a_ids)} and {len(team_b_ids)})"
            )
        if len(set(team_a_ids)) != half or len(set(team_b_ids)) != half:
            raise PartitionError("A team lists the same player more than once")
        overlap = set(team_a_ids) & set(team_b_ids)
        if overlap:
            raise PartitionError(f"Players assigned to both teams: {sorted(overlap)}")
        if set(team_a_ids) | set(team_b_ids) != set(by_id):
            unknown = (set(team_a_ids) | set(team_b_ids)) - set(by_id)
            raise PartitionError(f"Teams do not match the roster (unknown ids: {sorted(unknown)})")

        return TeamSplit(
            team_a=[by_id[i] for i in team_a_ids],
            team_b=[by_id[i] for i in team_b_ids],
            rationale=rationale,
        )

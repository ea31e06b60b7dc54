"""
Team generation for a session roster: deterministic, random and advisor-backed.
"""

import logging
from collections.abc import Sequence

from domain.models.player import Player
from domain.models.team import TeamSplit
from domain.services.team_balancing_service import (
    PartitionError,
    RosterSizeError,
    TeamBalancingService,
)
from services import error_codes
from services.ai_service import AIService
from services.result import Result

logger = logging.getLogger("spiketime.services.team")


class TeamService:
    """
    Wraps TeamBalancingService and the AI advisor behind Result-returning calls.

    The advisor path only validates what the model proposes; it never repairs a
    bad split and never falls back on its own. ``balance_with_fallback`` is the
    explicit opt-in for callers who want the deterministic split instead.
    """

    def __init__(
        self,
        balancing_service: TeamBalancingService | None = None,
        ai_service: AIService | None = None,
        advisor_roster_size: int | None = None,
        ai_enabled: bool = True,
    ):
        """
        Args:
            balancing_service: Domain balancer (a default instance is created if None)
            ai_service: LiteLLM wrapper; without it the advisor is unavailable
            advisor_roster_size: Exact roster size the advisor flow accepts
                                 (12 for the session UI); None allows any even size
            ai_enabled: Global switch for advisor calls
        """
        self.balancing_service = balancing_service or TeamBalancingService()
        self.ai_service = ai_service
        self.advisor_roster_size = advisor_roster_size
        self.ai_enabled = ai_enabled

    def balance_deterministic(self, players: Sequence[Player]) -> Result[TeamSplit]:
        try:
            split = self.balancing_service.balance_deterministic(players)
        except RosterSizeError as e:
            return Result.fail(str(e), code=error_codes.INVALID_ROSTER_SIZE)
        logger.debug(
            f"Balanced {len(players)} players by skill (spread {split.skill_spread})"
        )
        return Result.ok(split)

    def balance_random(self, players: Sequence[Player]) -> Result[TeamSplit]:
        try:
            split = self.balancing_service.balance_random(players)
        except RosterSizeError as e:
            return Result.fail(str(e), code=error_codes.INVALID_ROSTER_SIZE)
        return Result.ok(split)

    def _check_advisor_roster(self, players: Sequence[Player]) -> Result[None]:
        try:
            self.balancing_service.validate_roster_size(players)
        except RosterSizeError as e:
            return Result.fail(str(e), code=error_codes.INVALID_ROSTER_SIZE)
        if self.advisor_roster_size is not None and len(players) != self.advisor_roster_size:
            return Result.fail(
                f"Team advisor needs exactly {self.advisor_roster_size} players, got {len(players)}",
                code=error_codes.INVALID_ROSTER_SIZE,
            )
        return Result.ok()

    async def balance_via_advisor(
        self,
        players: Sequence[Player],
        timeout: float | None = None,
    ) -> Result[TeamSplit]:
        """
        Ask the language-model advisor for a split and validate it.

        Args:
            players: Roster to split
            timeout: Per-call timeout in seconds (defaults to the AI service timeout)

        Returns:
            Result.ok(TeamSplit with rationale), or a failure with
            INVALID_ROSTER_SIZE, ADVISOR_UNAVAILABLE or INVALID_ADVISOR_RESPONSE.
            Cancelling the awaiting task cancels the advisor call with it.
        """
        roster_check = self._check_advisor_roster(players)
        if not roster_check:
            return roster_check

        if self.ai_service is None or not self.ai_enabled:
            return Result.fail("Team advisor is not configured", code=error_codes.ADVISOR_UNAVAILABLE)

        roster = list(players)
        response = await self.ai_service.propose_team_split(roster, timeout=timeout)

        if response.failed:
            logger.warning(f"Team advisor unavailable: {response.error}")
            return Result.fail(
                f"Team advisor unavailable: {response.error}",
                code=error_codes.ADVISOR_UNAVAILABLE,
            )

        if response.tool_name != "propose_team_split":
            logger.warning("Team advisor answered without a team split")
            return Result.fail(
                "Team advisor did not return a team split",
                code=error_codes.INVALID_ADVISOR_RESPONSE,
            )

        args = response.tool_args
        team_a_ids = args.get("team_a")
        team_b_ids = args.get("team_b")
        rationale = args.get("rationale")
        if not isinstance(team_a_ids, list) or not isinstance(team_b_ids, list):
            return Result.fail(
                "Team advisor response is missing team lists",
                code=error_codes.INVALID_ADVISOR_RESPONSE,
            )

        try:
            split = self.balancing_service.validate_partition(
                roster,
                team_a_ids,
                team_b_ids,
                rationale=str(rationale) if rationale is not None else "",
            )
        except PartitionError as e:
            logger.warning(f"Rejected advisor team split: {e}")
            return Result.fail(str(e), code=error_codes.INVALID_ADVISOR_RESPONSE)

        logger.info(f"Advisor split {len(roster)} players (spread {split.skill_spread})")
        return Result.ok(split)

    async def balance_with_fallback(
        self,
        players: Sequence[Player],
        timeout: float | None = None,
    ) -> Result[TeamSplit]:
        """
        Try the advisor and fall back to the deterministic split when it fails.

        Roster size errors are returned as-is since the fallback would fail too.
        """
        result = await self.balance_via_advisor(players, timeout=timeout)
        if result or result.error_code == error_codes.INVALID_ROSTER_SIZE:
            return result
        logger.info(f"Falling back to deterministic split ({result.error_code})")
        return self.balance_deterministic(players)

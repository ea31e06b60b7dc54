"""
Domain services containing pure business logic.
"""

from domain.services.team_balancing_service import (
    PartitionError,
    RosterSizeError,
    TeamBalancingService,
)

__all__ = ["PartitionError", "RosterSizeError", "TeamBalancingService"]

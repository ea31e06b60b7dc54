"""
Service container for dependency injection and initialization.

This module centralizes store and service creation so that every service
shares one session store and one lock, instead of each caller building its own.

Usage:
    container = ServiceContainer(ServiceConfig.from_env())
    await container.initialize()

    enrollment = container.enrollment_service
    result = enrollment.book(session_id, player)
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from services.ai_service import AIService
    from services.announcement_service import AnnouncementService
    from services.enrollment_service import EnrollmentService
    from services.session_admin_service import SessionAdminService
    from services.team_service import TeamService

from repositories.announcement_repository import AnnouncementRepository
from repositories.session_repository import SessionRepository

logger = logging.getLogger("spiketime.infrastructure.container")


@dataclass
class RepositoryContainer:
    """Container for all repositories."""

    session: SessionRepository | None = None
    announcement: AnnouncementRepository | None = None


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Sessions
    default_session_capacity: int = 12
    session_visibility_grace_minutes: int = 60

    # Team balancing
    advisor_roster_size: int | None = 12
    random_seed: int | None = None

    # Optional features
    enable_ai_services: bool = False
    ai_api_key: str | None = None
    ai_model: str = "gemini/gemini-2.0-flash"
    ai_timeout_seconds: float = 15.0
    ai_max_tokens: int = 500

    # Injected clock (tests pin the time)
    clock: Callable[[], datetime] | None = None

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build a config from the values loaded by config.py."""
        import config

        return cls(
            default_session_capacity=config.DEFAULT_SESSION_CAPACITY,
            session_visibility_grace_minutes=config.SESSION_VISIBILITY_GRACE_MINUTES,
            advisor_roster_size=config.TEAM_ROSTER_SIZE,
            enable_ai_services=config.AI_FEATURES_ENABLED,
            ai_api_key=config.AI_API_KEY,
            ai_model=config.AI_MODEL,
            ai_timeout_seconds=config.AI_TIMEOUT_SECONDS,
            ai_max_tokens=config.AI_MAX_TOKENS,
        )


class ServiceContainer:
    """
    Central container for all application services.

    Handles proper initialization order and dependency injection.

    Example:
        container = ServiceContainer(config)
        await container.initialize()

        team_service = container.team_service
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False
        self._repos = RepositoryContainer()
        self._services: dict[str, Any] = {}
        # One lock for every writer of the shared stores
        self._session_lock = threading.RLock()

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """
        Initialize all services in correct order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._init_repositories()
        self._init_optional_services()
        self._init_core_services()

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_repositories(self) -> None:
        logger.debug("Initializing repositories")
        self._repos.session = SessionRepository()
        self._repos.announcement = AnnouncementRepository()

    def _init_optional_services(self) -> None:
        """Initialize the AI advisor when enabled and a key is configured."""
        if not self.config.enable_ai_services:
            logger.info("AI services disabled")
            return
        if not self.config.ai_api_key:
            logger.warning("AI services enabled but no API key configured; advisor unavailable")
            return

        from services.ai_service import AIService

        self._services["ai"] = AIService(
            model=self.config.ai_model,
            api_key=self.config.ai_api_key,
            timeout=self.config.ai_timeout_seconds,
            max_tokens=self.config.ai_max_tokens,
        )

    def _init_core_services(self) -> None:
        logger.debug("Initializing core services")

        from domain.services.team_balancing_service import TeamBalancingService
        from services.announcement_service import AnnouncementService
        from services.enrollment_service import EnrollmentService
        from services.session_admin_service import SessionAdminService
        from services.team_service import TeamService

        clock_kwargs = {"clock": self.config.clock} if self.config.clock else {}
        ai_service = self._services.get("ai")

        self._services["enrollment"] = EnrollmentService(
            session_repo=self._repos.session,
            visibility_grace=timedelta(minutes=self.config.session_visibility_grace_minutes),
            lock=self._session_lock,
            **clock_kwargs,
        )
        self._services["session_admin"] = SessionAdminService(
            session_repo=self._repos.session,
            lock=self._session_lock,
            ai_service=ai_service,
            default_capacity=self.config.default_session_capacity,
        )
        self._services["announcement"] = AnnouncementService(
            announcement_repo=self._repos.announcement,
            ai_service=ai_service,
            lock=self._session_lock,
            **clock_kwargs,
        )
        rng = random.Random(self.config.random_seed) if self.config.random_seed is not None else None
        self._services["team"] = TeamService(
            balancing_service=TeamBalancingService(rng=rng),
            ai_service=ai_service,
            advisor_roster_size=self.config.advisor_roster_size,
            ai_enabled=self.config.enable_ai_services,
        )

    # =========================================================================
    # Service accessors
    # =========================================================================

    @property
    def session_repo(self) -> SessionRepository:
        return self._repos.session

    @property
    def announcement_repo(self) -> AnnouncementRepository:
        return self._repos.announcement

    @property
    def ai_service(self) -> "AIService | None":
        return self._services.get("ai")

    @property
    def enrollment_service(self) -> "EnrollmentService | None":
        return self._services.get("enrollment")

    @property
    def session_admin_service(self) -> "SessionAdminService | None":
        return self._services.get("session_admin")

    @property
    def announcement_service(self) -> "AnnouncementService | None":
        return self._services.get("announcement")

    @property
    def team_service(self) -> "TeamService | None":
        return self._services.get("team")

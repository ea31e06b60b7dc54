"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod

from domain.models.announcement import Announcement
from domain.models.session import Session


class ISessionRepository(ABC):
    @abstractmethod
    def add(self, session: Session) -> None: ...

    @abstractmethod
    def get_by_id(self, session_id: str) -> Session | None: ...

    @abstractmethod
    def get_all(self) -> list[Session]: ...

    @abstractmethod
    def exists(self, session_id: str) -> bool: ...

    @abstractmethod
    def delete(self, session_id: str) -> bool: ...


class IAnnouncementRepository(ABC):
    @abstractmethod
    def add(self, announcement: Announcement) -> None: ...

    @abstractmethod
    def get_by_id(self, announcement_id: str) -> Announcement | None: ...

    @abstractmethod
    def get_all(self) -> list[Announcement]: ...

    @abstractmethod
    def delete(self, announcement_id: str) -> bool: ...

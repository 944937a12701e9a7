"""
Persistence collaborator interface.

The library core never talks to a database directly; it reads and
writes through a LibraryRepository.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager

from game_backlog.library.models import CatalogItem, EnrichedRecord, PlayStatus


class LibraryRepository(ABC):
    """
    Abstract per-user store of catalog items.

    Implementations must make ``transaction`` atomic for a user:
    concurrent readers never observe a state between the first and
    last write of a transaction, and a transaction that raises leaves
    no partial writes behind.

    Write methods raise PersistenceError on failure.
    """

    @abstractmethod
    def add_items(self, user_id: str, items: Iterable[CatalogItem]) -> None:
        """Insert items, replacing any existing item with the same app id."""
        ...

    @abstractmethod
    def get_item(self, user_id: str, app_id: int) -> CatalogItem | None:
        ...

    @abstractmethod
    def list_items(self, user_id: str) -> list[CatalogItem]:
        ...

    @abstractmethod
    def get_currently_playing(self, user_id: str) -> CatalogItem | None:
        """Return the user's item in PLAYING status, if any."""
        ...

    @abstractmethod
    def update_status(self, user_id: str, app_id: int, status: PlayStatus) -> None:
        ...

    @abstractmethod
    def bulk_demote(self, user_id: str, exclude_app_id: int | None = None) -> int:
        """
        Move every PLAYING item of the user back to BACKLOG.

        Returns:
            Number of items demoted
        """
        ...

    @abstractmethod
    def read_last_synced_at(self, user_id: str, app_id: int) -> str | None:
        ...

    @abstractmethod
    def write_enriched_record(self, user_id: str, app_id: int, record: EnrichedRecord) -> None:
        """
        Store a sync record, creating the item on its first sync.

        Fields of the record's ``failed_sources`` keep their stored
        values, and a partial record leaves ``last_synced_at`` unchanged.
        """
        ...

    @abstractmethod
    def transaction(self, user_id: str) -> AbstractContextManager["LibraryRepository"]:
        """Group writes for one user into a single atomic unit."""
        ...

    def items_needing_sync(self, user_id: str) -> list[CatalogItem]:
        """Items whose metadata has never been synced."""
        return [item for item in self.list_items(user_id) if not item.metadata_synced]

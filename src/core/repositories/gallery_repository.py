"""Abstract contract for gallery item persistence."""

from abc import ABC, abstractmethod

from core.models.gallery import GalleryItem
from core.models.pagination import FetchedRows


class GalleryRepository(ABC):
    """Contract for reading and deleting gallery items.

    Items are created by an external ingestion path and never updated here.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def list_before(self, *, before_id: str | None, limit: int) -> FetchedRows:
        """List items in descending identity order.

        Args:
            before_id: Only items whose identity is strictly less than this one;
                       None starts from the newest item
            limit: Maximum number of items to return

        Returns:
            Fetched rows sorted by identity, newest first, with the ids of
            every row read (including rows that failed validation)

        Raises:
            StoreError: If the query fails
        """

    @abstractmethod
    def list_recent(self, *, limit: int) -> list[GalleryItem]:
        """List the most recent items ordered by timestamp, newest first.

        Raises:
            StoreError: If the query fails
        """

    @abstractmethod
    def delete(self, *, item_id: str) -> bool:
        """Delete exactly one item.

        Returns:
            True if one item was deleted, False if none matched

        Raises:
            StoreError: If deletion fails
        """

    @abstractmethod
    def find_by_file_id(self, *, file_id: str) -> GalleryItem | None:
        """Fetch the item whose Telegram file_id matches.

        Raises:
            StoreError: If the lookup fails
        """

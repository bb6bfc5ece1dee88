"""
Business logic for listing and deleting gallery items.
"""

from aws_lambda_powertools import Logger

from core.filters.cursor_pagination import CursorPagination
from core.models.errors import NotFoundError
from core.models.gallery import GalleryItem, GalleryItemView
from core.models.pagination import CursorPage
from core.repositories.gallery_repository import GalleryRepository
from core.utils.constants import LEGACY_LIMIT

logger = Logger(UTC=True)


class GalleryService:
    """Application service responsible for gallery reads and deletes.

    This service coordinates:
    - Cursor pagination over items in descending identity order
    - The legacy listing of the newest items by timestamp
    - Deletion of a single item
    """

    def __init__(self, repository: GalleryRepository) -> None:
        self.repository = repository

    def list_page(self, *, limit: int, cursor: str | None) -> CursorPage:
        """Fetch one page of items strictly older than `cursor`.

        One extra row is requested so `has_more` needs no second query.
        Continuation is computed over every fetched row id, so a row that
        failed validation is left off the page without ending the walk.
        """
        rows = self.repository.list_before(before_id=cursor, limit=limit + 1)

        page_ids, has_more, next_cursor = CursorPagination.paginate(
            rows.row_ids,
            limit=limit,
            identity=str,
        )

        on_page = set(page_ids)
        page_items = [item for item in rows.items if str(item.id) in on_page]

        logger.info(
            "Gallery page listed",
            extra={
                "cursor": cursor,
                "limit": limit,
                "count": len(page_items),
                "has_more": has_more,
            },
        )

        return CursorPage(
            items=[item.to_view() for item in page_items],
            has_more=has_more,
            next_cursor=next_cursor,
            limit=limit,
        )

    def list_legacy(self, *, limit: int = LEGACY_LIMIT) -> list[GalleryItemView]:
        """Fetch the newest items by timestamp with no cursor semantics."""
        items: list[GalleryItem] = self.repository.list_recent(limit=limit)

        logger.info("Gallery listed (legacy)", extra={"count": len(items)})

        return [item.to_view() for item in items]

    def delete_item(self, item_id: str) -> str:
        """Delete one item.

        Raises:
            NotFoundError: If no item matched
            StoreError: If the store operation fails
        """
        if not self.repository.delete(item_id=item_id):
            logger.warning("Gallery item not found", extra={"item_id": item_id})
            raise NotFoundError(
                message="Not found",
                details={"id": item_id},
            )

        logger.info("Gallery item deleted", extra={"item_id": item_id})
        return item_id

"""MongoDB-backed implementation of GalleryRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from core.infrastructure.adapters.mongodb_adapter import MongoCollection
from core.models.errors import StoreError
from core.models.gallery import GalleryItem
from core.models.pagination import FetchedRows
from core.repositories.gallery_repository import GalleryRepository
from core.utils.constants import (
    ERROR_CODE_STORE_DELETE_FAILED,
    ERROR_CODE_STORE_LIST_FAILED,
    ERROR_CODE_STORE_LOOKUP_FAILED,
    GALLERY_PROJECTION,
)

Document = dict[str, Any]

logger = Logger(UTC=True)


class MongoGalleryStore(GalleryRepository):
    """MongoDB-backed gallery storage with error handling.

    All pymongo errors are caught and translated into StoreError.
    Documents are validated into GalleryItem on the way out; documents that
    do not fit the schema (in practice, a non-ObjectId `_id`) are skipped and
    logged. `list_before` still reports their ids for continuation.
    """

    def __init__(self, collection: MongoCollection) -> None:
        self._collection = collection

    @staticmethod
    def _to_items(documents: list[Document]) -> list[GalleryItem]:
        items: list[GalleryItem] = []
        for document in documents:
            try:
                items.append(GalleryItem.from_document(document))
            except PydanticValidationError as exc:
                logger.warning(
                    "Skipping malformed gallery document",
                    extra={"item_id": str(document.get("_id")), "errors": exc.error_count()},
                )
        return items

    def list_before(self, *, before_id: str | None, limit: int) -> FetchedRows:
        query: Document = {}
        if before_id:
            query = {"_id": {"$lt": ObjectId(before_id)}}

        logger.debug("Listing gallery page", extra={"before_id": before_id, "limit": limit})

        try:
            documents = list(
                self._collection.find(query, GALLERY_PROJECTION)
                .sort("_id", DESCENDING)
                .limit(limit)
            )
        except PyMongoError as exc:
            logger.error("MongoDB find failed", extra={"before_id": before_id})
            raise StoreError(
                message="Unable to list gallery items",
                error_code=ERROR_CODE_STORE_LIST_FAILED,
                details={"before_id": before_id},
            ) from exc

        return FetchedRows(
            items=self._to_items(documents),
            row_ids=[str(document.get("_id")) for document in documents],
        )

    def list_recent(self, *, limit: int) -> list[GalleryItem]:
        logger.debug("Listing recent gallery items", extra={"limit": limit})

        try:
            documents = list(
                self._collection.find({}, GALLERY_PROJECTION)
                .sort("timestamp", DESCENDING)
                .limit(limit)
            )
        except PyMongoError as exc:
            logger.error("MongoDB find failed")
            raise StoreError(
                message="Unable to list gallery items",
                error_code=ERROR_CODE_STORE_LIST_FAILED,
            ) from exc

        return self._to_items(documents)

    def delete(self, *, item_id: str) -> bool:
        logger.debug("Deleting gallery item", extra={"item_id": item_id})

        try:
            result = self._collection.delete_one({"_id": ObjectId(item_id)})
        except PyMongoError as exc:
            logger.error("MongoDB delete_one failed", extra={"item_id": item_id})
            raise StoreError(
                message="Unable to delete gallery item",
                error_code=ERROR_CODE_STORE_DELETE_FAILED,
                details={"item_id": item_id},
            ) from exc

        deleted = bool(result.deleted_count == 1)
        logger.info("Gallery item delete finished", extra={"item_id": item_id, "deleted": deleted})
        return deleted

    def find_by_file_id(self, *, file_id: str) -> GalleryItem | None:
        try:
            document = self._collection.find_one({"telegram.file_id": file_id}, {"telegram": 1})
        except PyMongoError as exc:
            logger.error("MongoDB find_one failed", extra={"file_id": file_id})
            raise StoreError(
                message="Unable to look up gallery item",
                error_code=ERROR_CODE_STORE_LOOKUP_FAILED,
                details={"file_id": file_id},
            ) from exc

        if document is None:
            return None

        items = self._to_items([document])
        return items[0] if items else None

"""Pagination models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.models.gallery import GalleryItem, GalleryItemView


class ListMode(str, Enum):
    """How a gallery listing is shaped."""

    LEGACY = "legacy"
    CURSOR = "cursor"


class CursorPage(BaseModel):
    """One page of a descending cursor walk over the gallery."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[GalleryItemView] = Field(..., description="Items, newest first")
    has_more: StrictBool = Field(
        ...,
        alias="hasMore",
        description="Whether more items are available after this page",
    )
    next_cursor: StrictStr | None = Field(
        None,
        alias="nextCursor",
        description="Cursor to use for the next page, if available",
    )
    limit: StrictInt = Field(..., description="Effective page size")


class FetchedRows(BaseModel):
    """Rows returned by one store query.

    `row_ids` lists every fetched row in query order, including rows that
    failed validation and are missing from `items`. Continuation is computed
    from `row_ids` so a skipped row never ends a cursor walk early.
    """

    items: list[GalleryItem] = Field(default_factory=list)
    row_ids: list[StrictStr] = Field(default_factory=list)

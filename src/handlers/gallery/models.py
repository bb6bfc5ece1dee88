"""
Pydantic models for gallery list and delete requests and responses.
"""

from collections.abc import Mapping
from typing import Any

from bson import ObjectId
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)

from core.filters.cursor_pagination import CursorPagination
from core.models.pagination import ListMode
from core.utils.constants import LEGACY_LIMIT, MAX_LIMIT, MIN_LIMIT


class ListGalleryRequest(BaseModel):
    """
    Validation model for the gallery listing.

    The mode is fixed from which query parameters are present:
    - limit present, or a non-blank cursor → cursor pagination
    - neither → legacy listing of the newest items by timestamp
    """

    mode: ListMode = Field(..., description="Listing mode")
    limit: int = Field(..., ge=MIN_LIMIT, le=MAX_LIMIT, description="Effective page size")
    cursor: str | None = Field(None, description="Identity of the last item already seen")

    @field_validator("cursor", mode="before")
    @classmethod
    def validate_cursor(cls, value: Any) -> str | None:
        cursor = CursorPagination.clean_cursor(value)
        if not cursor:
            return None

        if not ObjectId.is_valid(cursor):
            raise ValueError("Invalid cursor")

        return cursor

    @model_validator(mode="before")
    @classmethod
    def derive_from_query(cls, data: Any) -> Any:
        """Turn raw query parameters into mode, limit and cursor.

        Only `limit` and `cursor` are read; any other parameter, including a
        client-sent `mode`, is ignored.
        """
        params: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

        mode = CursorPagination.select_mode(params)

        if mode is ListMode.LEGACY:
            return {"mode": mode, "limit": LEGACY_LIMIT}

        return {
            "mode": mode,
            "limit": CursorPagination.resolve_limit(params.get("limit")),
            "cursor": params.get("cursor"),
        }


class DeleteGalleryItemRequest(BaseModel):
    """Validation model for deleting a gallery item."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: StrictStr = Field(..., min_length=1, description="Item identity to delete")

    @field_validator("id")
    @classmethod
    def validate_identity(cls, value: str) -> str:
        if not ObjectId.is_valid(value):
            raise ValueError("Invalid id")
        return value


class DeleteGalleryItemResponse(BaseModel):
    """Response model for a successful deletion."""

    model_config = ConfigDict(populate_by_name=True)

    ok: StrictBool = True
    deleted_id: StrictStr = Field(..., alias="deletedId", description="Deleted item identity")

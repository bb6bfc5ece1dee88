"""Gallery item models.

Documents are validated once, when they leave the store, so the rest of the
code works with typed fields instead of probing optional keys. Validation is
lenient: a field of an unexpected type is coerced or nulled, never a reason
to drop the item.
"""

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_serializer, field_validator

from core.utils.time import to_json_timestamp


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return None
    return str(value)


def to_jsonable(value: Any) -> Any:
    """Recursively convert BSON values into JSON-compatible ones.

    Datetimes become ISO-8601 strings; ObjectId, Decimal128 and other
    non-JSON scalars become strings.
    """
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, datetime):
        return to_json_timestamp(value)
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    return str(value)


class TelegramRef(BaseModel):
    """Where an item's media lives on Telegram."""

    model_config = ConfigDict(extra="ignore")

    chat_id: int | str | None = Field(None, description="Chat the media was posted to")
    file_id: str | None = Field(None, description="Telegram file identifier")
    bot_token: str | None = Field(
        None,
        repr=False,
        description="Per-item bot credential override; never exposed",
    )

    @field_validator("chat_id", mode="before")
    @classmethod
    def coerce_chat_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return _as_text(value)

    @field_validator("file_id", "bot_token", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> str | None:
        return _as_text(value)


class TelegramView(BaseModel):
    """Public part of TelegramRef."""

    chat_id: int | str | None = None
    file_id: str | None = None


class GalleryItemView(BaseModel):
    """Gallery item as returned by the API."""

    id: StrictStr = Field(..., description="Stringified store identity")
    prompt: str | None = Field(None, description="Generation prompt")
    metadata: dict[str, Any] = Field(default_factory=dict)
    telegram: TelegramView
    timestamp: Any = Field(None, description="Creation time")

    @field_serializer("metadata", "timestamp")
    def serialize_bson(self, value: Any) -> Any:
        return to_jsonable(value)


class GalleryItem(BaseModel):
    """Gallery item as stored in the document store."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: ObjectId = Field(..., alias="_id")
    prompt: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    telegram: TelegramRef = Field(default_factory=TelegramRef)
    timestamp: Any = None

    @field_validator("prompt", mode="before")
    @classmethod
    def coerce_prompt(cls, value: Any) -> str | None:
        return _as_text(value)

    @field_validator("metadata", "telegram", mode="before")
    @classmethod
    def default_missing_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "GalleryItem":
        return cls.model_validate(document)

    def to_view(self) -> GalleryItemView:
        # Falsy chat/file ids are reported as null
        return GalleryItemView(
            id=str(self.id),
            prompt=self.prompt,
            metadata=self.metadata,
            telegram=TelegramView(
                chat_id=self.telegram.chat_id or None,
                file_id=self.telegram.file_id or None,
            ),
            timestamp=to_json_timestamp(self.timestamp),
        )

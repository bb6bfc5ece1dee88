from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import ASSET_FORMAT_RAW, ASSET_FORMAT_URL


class ResolveAssetRequest(BaseModel):
    """Validation model for asset resolution."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Telegram file identifier",
    )

    format: Literal["raw", "url"] = Field(
        default=ASSET_FORMAT_RAW,
        description=(
            f"'{ASSET_FORMAT_RAW}' relays the media bytes, "
            f"'{ASSET_FORMAT_URL}' returns the resolved URL as JSON"
        ),
    )

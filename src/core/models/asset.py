"""Resolved asset models."""

from pydantic import BaseModel, Field, StrictBytes, StrictStr


class ResolvedUrl(BaseModel):
    """A direct file URL produced by a provider."""

    url: StrictStr = Field(..., description="Fetchable file URL")
    provider: StrictStr = Field(..., description="Name of the provider that resolved it")


class ResolvedContent(BaseModel):
    """Media bytes relayed from a provider's file URL."""

    content: StrictBytes = Field(..., repr=False)
    content_type: StrictStr = Field(..., description="Upstream Content-Type")
    provider: StrictStr = Field(..., description="Name of the provider that served it")


class AssetUrlResponse(BaseModel):
    """Response body for URL-mode resolution."""

    url: StrictStr

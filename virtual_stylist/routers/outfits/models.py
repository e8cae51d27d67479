"""Pydantic models used by the outfits router."""

from typing import List, Optional

from pydantic import BaseModel, Field


class SlotResponse(BaseModel):
    """State of one outfit style."""

    style: str = Field(..., description="Style key used in edit URLs")
    label: str
    title: str
    status: str = Field(..., description="idle, generating, success or error")
    image_url: Optional[str] = Field(None, description="Generated image as a data URI")
    error: Optional[str] = None


class StylistStateResponse(BaseModel):
    """Snapshot of the stylist session."""

    version: int
    has_image: bool
    preview_url: Optional[str] = Field(None, description="Uploaded item as a data URI")
    is_generating: bool
    slots: List[SlotResponse]


class ActionResponse(BaseModel):
    """Response for generate and edit intents."""

    success: bool
    accepted: bool = Field(..., description="False when the intent was a no-op")
    message: str
    state: StylistStateResponse


class EditRequestBody(BaseModel):
    """Free-text edit instruction for one style."""

    instruction: str = Field(..., max_length=1000)


class ErrorResponse(BaseModel):
    """Error payload returned with a non-success status."""

    detail: str

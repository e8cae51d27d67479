"""Service helpers used by the outfits router."""

from fastapi import HTTPException, UploadFile

from virtual_stylist.config import logger
from virtual_stylist.core.outfits import Style, StylistState

from .models import SlotResponse, StylistStateResponse


def serialize_state(state: StylistState) -> StylistStateResponse:
    """Convert a committed snapshot into the API payload, slots in style order."""
    slots = []
    for style in Style:
        slot = state.slot(style)
        slots.append(
            SlotResponse(
                style=style.value,
                label=style.label,
                title=style.display_title,
                status=slot.status.value,
                image_url=slot.image_uri,
                error=slot.error_message,
            )
        )

    return StylistStateResponse(
        version=state.version,
        has_image=state.image is not None,
        preview_url=state.image.preview_uri if state.image else None,
        is_generating=state.is_generating,
        slots=slots,
    )


async def read_upload(image: UploadFile) -> bytes:
    """Read the uploaded file body, turning read failures into a 400."""
    try:
        return await image.read()
    except OSError as exc:
        logger.error("Failed to read uploaded file", extra={"error": str(exc)})
        raise HTTPException(status_code=400, detail="Failed to read the file.")

"""FastAPI router for the virtual stylist endpoints."""

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    HTTPException,
    Response,
    UploadFile,
)

from virtual_stylist.config import logger
from virtual_stylist.core.encoder import ImageReadError
from virtual_stylist.core.outfits import Style
from virtual_stylist.services.stylist_service import NoImageError, StylistOrchestrator

from .dependencies import get_orchestrator, get_style
from .models import ActionResponse, EditRequestBody, ErrorResponse, StylistStateResponse
from .services import read_upload, serialize_state

router = APIRouter(prefix="/api/v1", tags=["Virtual Stylist"])


@router.post(
    "/upload",
    response_model=StylistStateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_source_image(
    image: UploadFile = File(..., description="Photo of a single clothing item"),
    orchestrator: StylistOrchestrator = Depends(get_orchestrator),
) -> StylistStateResponse:
    """Replace the source image and reset every outfit slot."""

    logger.info("Upload received", extra={"upload_filename": image.filename})

    try:
        data = await read_upload(image)
        state = orchestrator.upload(
            data,
            filename=image.filename,
            content_type=image.content_type,
        )
        return serialize_state(state)

    except ImageReadError as exc:
        raise HTTPException(status_code=400, detail=f"Failed to read the file: {exc}")

    except HTTPException:
        raise

    except Exception as exc:
        logger.error("Unexpected error during upload", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"An unexpected error occurred: {exc}",
        )


@router.get("/outfits", response_model=StylistStateResponse)
async def get_outfits(
    orchestrator: StylistOrchestrator = Depends(get_orchestrator),
) -> StylistStateResponse:
    """Return the current snapshot of the session."""

    return serialize_state(orchestrator.snapshot())


@router.post(
    "/outfits/generate",
    response_model=ActionResponse,
    status_code=202,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_outfits(
    background_tasks: BackgroundTasks,
    orchestrator: StylistOrchestrator = Depends(get_orchestrator),
) -> ActionResponse:
    """Start generating all three styles; results arrive independently."""

    if orchestrator.snapshot().is_generating:
        raise HTTPException(
            status_code=409,
            detail="Outfits are already being generated",
        )

    try:
        batch = orchestrator.begin_generate_all()
        background_tasks.add_task(orchestrator.run_generation, batch)
        logger.info("Generation batch scheduled", extra={"version": batch.version})

        return ActionResponse(
            success=True,
            accepted=True,
            message="Generating looks. Poll /api/v1/outfits for results.",
            state=serialize_state(orchestrator.snapshot()),
        )

    except NoImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    except Exception as exc:
        logger.error("Unexpected error starting generation", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"An unexpected error occurred: {exc}",
        )


@router.post(
    "/outfits/{style}/edit",
    response_model=ActionResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def edit_outfit(
    payload: EditRequestBody,
    response: Response,
    background_tasks: BackgroundTasks,
    style: Style = Depends(get_style),
    orchestrator: StylistOrchestrator = Depends(get_orchestrator),
) -> ActionResponse:
    """Edit one style's current image with a free-text instruction."""

    if orchestrator.snapshot().slot(style).is_generating:
        raise HTTPException(
            status_code=409,
            detail=f"{style.label} outfit is still generating",
        )

    try:
        request = orchestrator.begin_edit(style, payload.instruction)
        if request is None:
            return ActionResponse(
                success=True,
                accepted=False,
                message="Nothing to edit: provide an instruction for a generated outfit.",
                state=serialize_state(orchestrator.snapshot()),
            )

        background_tasks.add_task(orchestrator.run_edit, request)
        logger.info("Edit scheduled", extra={"style": style.value})

        response.status_code = 202
        return ActionResponse(
            success=True,
            accepted=True,
            message=f"Remixing the {style.label} outfit.",
            state=serialize_state(orchestrator.snapshot()),
        )

    except Exception as exc:
        logger.error(f"Unexpected error starting {style.value} edit", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"An unexpected error occurred: {exc}",
        )


@router.get("/health")
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "virtual-stylist-api",
        "version": "1.0.0",
    }

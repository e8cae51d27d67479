"""FastAPI dependencies shared across outfit endpoints."""

from fastapi import HTTPException, Request

from virtual_stylist.core.outfits import Style
from virtual_stylist.services.stylist_service import StylistOrchestrator


def get_orchestrator(request: Request) -> StylistOrchestrator:
    """Return the process-wide orchestrator created at startup."""
    return request.app.state.orchestrator


def get_style(style: str) -> Style:
    """Resolve the style path segment, rejecting unknown styles with 404."""
    try:
        return Style(style)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown style: {style}")

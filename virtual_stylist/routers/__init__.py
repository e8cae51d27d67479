"""Router package exposing all API routers."""

from fastapi import APIRouter

from .outfits.router import router as outfits_router

router = APIRouter()
router.include_router(outfits_router)

__all__ = ["router", "outfits_router"]

"""API router combining all endpoint modules."""

from fastapi import APIRouter

from .routes.convert import router as convert_router
from .routes.sample import router as sample_router

router = APIRouter()

router.include_router(convert_router, tags=["convert"])
router.include_router(sample_router, tags=["sample"])

"""Dependency injection providers for FastAPI.

Stateful resources are created in the app lifespan and stored on
``app.state``; these providers hand them to route functions.
"""

import asyncio
from typing import Annotated

from fastapi import Depends, Request

from .config import Settings, get_settings
from .pdf_generator import PlaywrightPDFGenerator


async def get_pdf_generator_dependency(request: Request) -> PlaywrightPDFGenerator | None:
    """
    Get PDF generator instance from app state.

    Returns None if the browser pool is disabled or failed to start.
    """
    return getattr(request.app.state, "pdf_generator", None)


def get_pdf_semaphore(request: Request) -> asyncio.Semaphore:
    """
    Get PDF rendering semaphore from app state.

    Raises:
        RuntimeError: If the semaphore was not created by the lifespan
    """
    if not hasattr(request.app.state, "pdf_semaphore"):
        raise RuntimeError("PDF semaphore not initialized. Check app lifespan configuration.")
    return request.app.state.pdf_semaphore


def get_settings_dependency() -> Settings:
    """Get application settings."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
PDFGeneratorDep = Annotated[PlaywrightPDFGenerator | None, Depends(get_pdf_generator_dependency)]
PDFSemaphoreDep = Annotated[asyncio.Semaphore, Depends(get_pdf_semaphore)]

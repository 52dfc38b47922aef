"""Main FastAPI application module."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import router
from .config import get_settings
from .logging_config import get_logger, setup_logging
from .models.responses import HealthResponse, PDFServiceInfo
from .pdf_generator import PlaywrightPDFGenerator

# Load settings and configure logging
settings = get_settings()
setup_logging(settings.logging)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events - initialize and cleanup resources."""
    # get_settings() again so tests that reload settings are honoured
    current_settings = get_settings()
    app.state.settings = current_settings

    logger.info(f"Starting {current_settings.app_name} v{current_settings.app_version}")
    logger.info(f"Environment: {current_settings.environment}")
    for message in current_settings.validate_settings():
        if "WARNING" in message:
            logger.warning(message.replace("WARNING: ", ""))
        elif "ERROR" in message:
            logger.error(message.replace("ERROR: ", ""))
        else:
            logger.info(message.replace("INFO: ", ""))

    app.state.pdf_generator = None
    if current_settings.pdf.enabled:
        logger.info("Initializing PDF generator with browser pool...")
        try:
            pdf_generator = PlaywrightPDFGenerator(
                pool_size=current_settings.pdf.pool_size,
                render_timeout=current_settings.pdf.render_timeout,
                page_format=current_settings.pdf.page_format,
                margin=current_settings.pdf.margin,
            )
            await pdf_generator.start()
            app.state.pdf_generator = pdf_generator
            logger.info("PDF generator initialized successfully")
        except Exception as e:
            logger.warning(
                f"PDF generator initialization failed: {e}. PDF output will be unavailable."
            )
    else:
        logger.info("PDF generator disabled by configuration")

    app.state.pdf_semaphore = asyncio.Semaphore(current_settings.pdf.concurrency)
    logger.info(f"PDF concurrency semaphore initialized ({current_settings.pdf.concurrency})")

    yield

    logger.info("Shutting down services...")
    if app.state.pdf_generator:
        await app.state.pdf_generator.close()
    logger.info("All services shut down successfully")


app = FastAPI(
    title="Markdown Plain Text Converter",
    description="Convert Markdown to plain text for reading, download and printing",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint reporting PDF rendering capacity."""
    app_settings = request.app.state.settings
    pdf_semaphore = request.app.state.pdf_semaphore
    pdf_limit = app_settings.pdf.concurrency
    pdf_generator = getattr(request.app.state, "pdf_generator", None)

    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=app_settings.environment,
        max_upload_size_mb=app_settings.content.max_upload_size / 1024 / 1024,
        pdf_generation=PDFServiceInfo(
            available=pdf_generator is not None,
            max_concurrent_pdfs=pdf_limit,
            current_active_pdfs=pdf_limit - pdf_semaphore._value,
            available_slots=pdf_semaphore._value,
        ),
    )


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("md2text.main:app", host="0.0.0.0", port=8000, reload=True)

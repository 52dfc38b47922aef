"""Markdown conversion endpoints."""

import asyncio
import logging

from fastapi import APIRouter, File, Header, HTTPException, Response, UploadFile

from ..config import Settings
from ..dependencies import PDFGeneratorDep, PDFSemaphoreDep, SettingsDep
from ..logging_config import log_with_context
from ..models.responses import ConvertRequest, ErrorResponse
from ..pdf_generator import PDFGeneratorError, PlaywrightPDFGenerator
from ..services.document_service import (
    UploadValidationError,
    decode_upload,
    handle_download_response,
    handle_html_response,
    handle_json_response,
    handle_pdf_response,
    handle_text_response,
    parse_accept_header,
    validate_upload,
)
from ..transformers import convert

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/convert")


def _convert(markdown: str, source: str) -> str:
    text = convert(markdown)
    log_with_context(
        logger,
        logging.INFO,
        "Conversion completed",
        source=source,
        input_chars=len(markdown),
        output_chars=len(text),
    )
    return text


async def _render(
    markdown: str,
    text: str,
    format_type: str,
    settings: Settings,
    pdf_generator: PlaywrightPDFGenerator | None,
    pdf_semaphore: asyncio.Semaphore,
    filename: str | None = None,
) -> Response:
    """Render converted text in the negotiated format, mapping failures to HTTP errors."""
    try:
        if format_type == "text":
            return await handle_text_response(markdown, text)
        elif format_type == "html":
            return await handle_html_response(markdown, text, settings.content)
        elif format_type == "pdf":
            return await handle_pdf_response(
                markdown, text, settings.content, pdf_generator, pdf_semaphore
            )
        else:
            return await handle_json_response(markdown, text, filename)

    except PDFGeneratorError as e:
        logger.error(f"PDF generation failed: {e}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                error=f"PDF generation failed: {e}", error_type="pdf_generation_error"
            ).model_dump(),
        )

    except HTTPException:
        raise

    except Exception as e:
        logger.exception(f"Unexpected error rendering {format_type} output: {e}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                error="Internal server error", error_type="internal_error"
            ).model_dump(),
        )


@router.post("")
async def convert_markdown(
    payload: ConvertRequest,
    settings: SettingsDep,
    pdf_generator: PDFGeneratorDep,
    pdf_semaphore: PDFSemaphoreDep,
    accept: str | None = Header(None, description="Accept header for output format"),
) -> Response:
    """
    Convert Markdown to plain text.

    Output format follows the Accept header:
    - text/plain: the converted text
    - text/html: printable HTML document
    - application/pdf: PDF rendering of the printable document
    - anything else: JSON with the text and size statistics
    """
    format_type = parse_accept_header(accept)
    logger.info(f"Requested format: {format_type} (Accept: {accept})")
    text = _convert(payload.markdown, source="body")
    return await _render(
        payload.markdown, text, format_type, settings, pdf_generator, pdf_semaphore
    )


@router.post("/upload")
async def convert_upload(
    settings: SettingsDep,
    pdf_generator: PDFGeneratorDep,
    pdf_semaphore: PDFSemaphoreDep,
    file: UploadFile = File(..., description="Markdown (.md) or text (.txt) file"),
    accept: str | None = Header(None, description="Accept header for output format"),
) -> Response:
    """Convert an uploaded Markdown or text file, decoded as UTF-8."""
    data = await file.read()
    try:
        validate_upload(file.filename, len(data), settings.content)
    except UploadValidationError as e:
        logger.warning(f"Upload rejected for {file.filename}: {e}")
        raise HTTPException(
            status_code=e.status_code,
            detail=ErrorResponse(error=str(e), error_type=e.error_type).model_dump(),
        )

    markdown = decode_upload(data)
    format_type = parse_accept_header(accept)
    text = _convert(markdown, source="upload")
    return await _render(
        markdown,
        text,
        format_type,
        settings,
        pdf_generator,
        pdf_semaphore,
        filename=file.filename,
    )


@router.post("/download")
async def download_converted(payload: ConvertRequest, settings: SettingsDep) -> Response:
    """Convert Markdown and return the text as a file attachment."""
    text = _convert(payload.markdown, source="download")
    return await handle_download_response(payload.markdown, text, settings.content)


@router.post("/print")
async def print_converted(payload: ConvertRequest, settings: SettingsDep) -> Response:
    """Convert Markdown and return a printable HTML document."""
    text = _convert(payload.markdown, source="print")
    return await handle_html_response(payload.markdown, text, settings.content)

"""Document service: upload decoding and output formats for converted text."""

import asyncio
import logging
from pathlib import PurePath

from fastapi import HTTPException, Response

from ..config import ContentConfig
from ..models.responses import ConvertResponse, ErrorResponse
from ..pdf_generator import PlaywrightPDFGenerator
from ..print_document import render_print_document

logger = logging.getLogger(__name__)


class UploadValidationError(Exception):
    """Raised when an uploaded file is rejected before conversion."""

    def __init__(self, message: str, status_code: int, error_type: str):
        super().__init__(message)
        self.status_code = status_code
        self.error_type = error_type


def parse_accept_header(accept_header: str | None) -> str:
    """
    Parse Accept header to determine response format.

    Args:
        accept_header: The Accept header value

    Returns:
        Format string: 'text', 'html', 'pdf' or 'json'
    """
    if not accept_header:
        return "json"

    accept_header = accept_header.lower()

    if "text/plain" in accept_header:
        return "text"
    elif "text/html" in accept_header:
        return "html"
    elif "application/pdf" in accept_header:
        return "pdf"
    else:
        return "json"


def validate_upload(filename: str | None, size: int, config: ContentConfig) -> None:
    """
    Check an uploaded file's extension and size.

    Raises:
        UploadValidationError: If the extension is not allowed or the file is too large
    """
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in config.allowed_extensions:
        raise UploadValidationError(
            f"Unsupported file type '{suffix or filename}'. "
            f"Allowed: {', '.join(config.allowed_extensions)}",
            status_code=415,
            error_type="unsupported_file_type",
        )
    if size > config.max_upload_size:
        raise UploadValidationError(
            f"File is {size} bytes; the limit is {config.max_upload_size} bytes",
            status_code=413,
            error_type="payload_too_large",
        )


def decode_upload(data: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a BOM and replacing invalid sequences."""
    return data.decode("utf-8-sig", errors="replace")


def build_convert_response(
    markdown: str, text: str, filename: str | None = None
) -> ConvertResponse:
    """Build the JSON body describing a conversion."""
    return ConvertResponse(
        text=text,
        input_size=len(markdown),
        output_size=len(text),
        line_count=len(text.splitlines()),
        filename=filename,
    )


def _size_headers(markdown: str, text: str) -> dict[str, str]:
    return {
        "X-Input-Length": str(len(markdown)),
        "X-Output-Length": str(len(text)),
    }


async def handle_json_response(
    markdown: str, text: str, filename: str | None = None
) -> Response:
    """Handle JSON format response."""
    body = build_convert_response(markdown, text, filename)
    return Response(
        content=body.model_dump_json(),
        media_type="application/json",
        headers=_size_headers(markdown, text),
    )


async def handle_text_response(markdown: str, text: str) -> Response:
    """Handle plain text format response."""
    return Response(
        content=text,
        media_type="text/plain; charset=utf-8",
        headers=_size_headers(markdown, text),
    )


async def handle_download_response(markdown: str, text: str, config: ContentConfig) -> Response:
    """Handle plain text attachment response."""
    headers = _size_headers(markdown, text)
    headers["Content-Disposition"] = f'attachment; filename="{config.download_filename}"'
    return Response(
        content=text,
        media_type="text/plain; charset=utf-8",
        headers=headers,
    )


async def handle_html_response(markdown: str, text: str, config: ContentConfig) -> Response:
    """Handle printable HTML document response."""
    return Response(
        content=render_print_document(text, title=config.print_title),
        media_type="text/html; charset=utf-8",
        headers=_size_headers(markdown, text),
    )


async def handle_pdf_response(
    markdown: str,
    text: str,
    config: ContentConfig,
    pdf_generator: PlaywrightPDFGenerator | None,
    pdf_semaphore: asyncio.Semaphore,
) -> Response:
    """Handle PDF format response with concurrency control."""
    if pdf_generator is None:
        logger.warning("PDF requested but the PDF generator is not running")
        raise HTTPException(
            status_code=503,
            detail=ErrorResponse(
                error="PDF generation is not available on this server.",
                error_type="service_unavailable",
            ).model_dump(),
        )

    if pdf_semaphore.locked():
        logger.warning("PDF service at capacity, rejecting request")
        raise HTTPException(
            status_code=503,
            detail=ErrorResponse(
                error="PDF service temporarily unavailable. Please try again later.",
                error_type="service_unavailable",
            ).model_dump(),
        )

    document = render_print_document(text, title=config.print_title)
    async with pdf_semaphore:
        pdf_content = await pdf_generator.generate_pdf(document)

    pdf_name = PurePath(config.download_filename).with_suffix(".pdf").name
    headers = _size_headers(markdown, text)
    headers["Content-Disposition"] = f'inline; filename="{pdf_name}"'
    return Response(content=pdf_content, media_type="application/pdf", headers=headers)

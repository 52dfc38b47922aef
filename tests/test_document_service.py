"""Tests for the document service helpers."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from src.md2text.config import ContentConfig
from src.md2text.services.document_service import (
    UploadValidationError,
    build_convert_response,
    decode_upload,
    handle_download_response,
    handle_pdf_response,
    parse_accept_header,
    validate_upload,
)


class TestAcceptHeader:
    @pytest.mark.parametrize(
        "header, expected_format",
        [
            ("text/plain", "text"),
            ("text/html", "html"),
            ("application/pdf", "pdf"),
            ("application/json", "json"),
            ("TEXT/PLAIN; charset=utf-8", "text"),
            ("image/png", "json"),
            ("", "json"),
            (None, "json"),
        ],
    )
    def test_parse_accept_header(self, header, expected_format):
        """Test Accept values map to output formats."""
        assert parse_accept_header(header) == expected_format


class TestUploadValidation:
    @pytest.mark.parametrize("filename", ["notes.md", "README.MD", "plain.txt"])
    def test_allowed_extensions(self, filename):
        """Test supported extensions pass regardless of case."""
        validate_upload(filename, 10, ContentConfig())

    @pytest.mark.parametrize("filename", ["image.png", "archive.md.zip", "noext", None])
    def test_rejected_extensions(self, filename):
        """Test other or missing extensions are rejected with 415."""
        with pytest.raises(UploadValidationError) as exc_info:
            validate_upload(filename, 10, ContentConfig())
        assert exc_info.value.status_code == 415
        assert exc_info.value.error_type == "unsupported_file_type"

    def test_too_large(self):
        """Test oversized uploads are rejected with 413."""
        config = ContentConfig(max_upload_size=1024)
        with pytest.raises(UploadValidationError) as exc_info:
            validate_upload("big.md", 1025, config)
        assert exc_info.value.status_code == 413
        assert exc_info.value.error_type == "payload_too_large"

    def test_exactly_at_limit(self):
        """Test an upload at the limit is accepted."""
        validate_upload("ok.md", 1024, ContentConfig(max_upload_size=1024))


class TestDecodeUpload:
    def test_utf8(self):
        """Test UTF-8 bytes decode unchanged."""
        assert decode_upload("# 見出し".encode("utf-8")) == "# 見出し"

    def test_bom_removed(self):
        """Test a leading byte order mark is removed."""
        assert decode_upload(b"\xef\xbb\xbf# Title") == "# Title"

    def test_invalid_bytes_replaced(self):
        """Test invalid bytes become replacement characters."""
        assert decode_upload(b"a\xffb") == "a�b"


class TestResponses:
    def test_build_convert_response(self):
        """Test the JSON body carries text and size statistics."""
        body = build_convert_response("**a**\n- b", "a\n• b", "x.md")
        assert body.success is True
        assert body.text == "a\n• b"
        assert body.input_size == 9
        assert body.output_size == 5
        assert body.line_count == 2
        assert body.filename == "x.md"

    @pytest.mark.asyncio
    async def test_download_response(self):
        """Test the download response is a named attachment."""
        response = await handle_download_response("**a**", "a", ContentConfig())
        assert response.body == b"a"
        assert response.media_type == "text/plain; charset=utf-8"
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="converted-text.txt"'
        )

    @pytest.mark.asyncio
    async def test_pdf_unavailable(self):
        """Test a missing generator yields 503."""
        with pytest.raises(HTTPException) as exc_info:
            await handle_pdf_response("a", "a", ContentConfig(), None, asyncio.Semaphore(1))
        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["error_type"] == "service_unavailable"

    @pytest.mark.asyncio
    async def test_pdf_at_capacity(self):
        """Test a full semaphore yields 503 without rendering."""
        semaphore = asyncio.Semaphore(1)
        await semaphore.acquire()
        generator = AsyncMock()
        with pytest.raises(HTTPException) as exc_info:
            await handle_pdf_response("a", "a", ContentConfig(), generator, semaphore)
        assert exc_info.value.status_code == 503
        generator.generate_pdf.assert_not_called()

    @pytest.mark.asyncio
    async def test_pdf_renders_print_document(self):
        """Test PDF bytes are served inline from the print document."""
        generator = AsyncMock()
        generator.generate_pdf.return_value = b"%PDF"
        response = await handle_pdf_response(
            "# x", "x", ContentConfig(), generator, asyncio.Semaphore(1)
        )
        assert response.body == b"%PDF"
        assert response.media_type == "application/pdf"
        assert response.headers["content-disposition"] == 'inline; filename="converted-text.pdf"'
        html = generator.generate_pdf.call_args.args[0]
        assert "<pre>x</pre>" in html

"""Shared test fixtures and configuration."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.md2text.config import reload_settings
from src.md2text.main import app


@pytest.fixture
def env_no_pdf():
    """Fixture to disable the browser pool so tests never launch Chromium."""
    with patch.dict(os.environ, {"PDF_ENABLED": "false"}, clear=False):
        reload_settings()
        yield
    reload_settings()


@pytest.fixture
def api_client(env_no_pdf):
    """Fixture to provide FastAPI test client with lifespan events."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def mock_pdf_generator():
    """Fixture installing a fake PDF generator on the running app."""
    generator = AsyncMock()
    generator.generate_pdf.return_value = b"%PDF-1.4 fake"
    return generator


@pytest.fixture
def pdf_api_client(api_client, mock_pdf_generator):
    """Test client whose app has a working (mocked) PDF generator."""
    app.state.pdf_generator = mock_pdf_generator
    yield api_client
    app.state.pdf_generator = None


@pytest.fixture
def mock_playwright():
    """Mock playwright instance for PDF generation tests."""
    with patch("src.md2text.pdf_generator.async_playwright") as mock:
        playwright_instance = AsyncMock()
        mock.return_value.start = AsyncMock(return_value=playwright_instance)

        browser = AsyncMock()
        browser.is_connected = MagicMock(return_value=True)
        playwright_instance.chromium.launch = AsyncMock(return_value=browser)

        yield mock, playwright_instance, browser


@pytest.fixture
def sample_markdown():
    """Fixture providing a small Markdown document."""
    return (
        "# Title\n"
        "\n"
        "Some **bold** and *italic* text with a [link](https://example.com).\n"
        "\n"
        "- first\n"
        "- second\n"
    )

import pytest

from src.md2text import convert
from src.md2text.sample import SAMPLE_MARKDOWN


@pytest.mark.integration
class TestSampleEndpoint:
    """GET /sample supplies a document for trying the converter."""

    def test_sample_markdown(self, api_client):
        """Test the sample is served as Markdown."""
        response = api_client.get("/sample")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert response.text == SAMPLE_MARKDOWN

    def test_sample_round_trip_through_convert(self, api_client):
        """Test the served sample converts like the library call."""
        sample = api_client.get("/sample").text
        response = api_client.post(
            "/convert", json={"markdown": sample}, headers={"Accept": "text/plain"}
        )
        assert response.status_code == 200
        assert response.text == convert(sample)


@pytest.mark.unit
class TestSampleConversion:
    """The sample exercises every rule."""

    def test_sample_converted(self):
        """Test the sample exercises every rule."""
        text = convert(SAMPLE_MARKDOWN)
        assert text.startswith("Markdown Converter\n")
        assert "This tool turns Markdown into plain text" in text
        assert "You can write bold italic, bold, italic and struck text." in text
        assert 'Inline code such as print("hello") keeps only its content.' in text
        assert "• First item\n• Second item\n• Nested item" in text
        assert "• Step one\n• Step two" in text
        assert "Read the documentation or look at\na diagram." in text
        assert "Quoted text loses its marker." in text
        assert '# Code blocks are kept verbatim\nvalue = "*not emphasis*"' in text
        assert "```" not in text
        assert "\n\n\n" not in text

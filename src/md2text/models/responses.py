"""Request and response models for API endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response model for errors."""
    success: bool = False
    error: str
    error_type: str


class ConvertRequest(BaseModel):
    """Markdown document submitted for conversion."""
    markdown: str = Field("", description="Markdown source text")


class ConvertResponse(BaseModel):
    """Response model for a JSON conversion result."""
    success: bool = Field(True, description="Always true; conversion never fails")
    text: str = Field(..., description="Plain text output")
    input_size: int = Field(..., description="Length of the Markdown input in characters")
    output_size: int = Field(..., description="Length of the plain text output in characters")
    line_count: int = Field(..., description="Number of lines in the plain text output")
    filename: str | None = Field(None, description="Uploaded filename, if any")


class PDFServiceInfo(BaseModel):
    """PDF rendering availability and slot usage."""
    available: bool = Field(..., description="Whether the browser pool is running")
    max_concurrent_pdfs: int = Field(..., description="Maximum concurrent renders")
    current_active_pdfs: int = Field(..., description="Renders in progress")
    available_slots: int = Field(..., description="Free render slots")


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Package version")
    environment: str = Field(..., description="Runtime environment")
    max_upload_size_mb: float = Field(..., description="Upload size limit in MB")
    pdf_generation: PDFServiceInfo = Field(..., description="PDF rendering status")

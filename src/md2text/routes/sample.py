"""Sample document endpoint."""

from fastapi import APIRouter, Response

from ..sample import get_sample_markdown

router = APIRouter()


@router.get("/sample")
async def sample_markdown() -> Response:
    """Return a sample Markdown document that exercises every conversion rule."""
    return Response(content=get_sample_markdown(), media_type="text/markdown; charset=utf-8")

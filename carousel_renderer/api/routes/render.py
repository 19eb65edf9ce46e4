"""
Render Routes
=============

FastAPI route that renders an HTML document to a carousel slide PNG.
"""

from fastapi import APIRouter

from carousel_renderer.config.logging import get_logger
from carousel_renderer.core.rendering.png_generator import generate_png_from_html
from carousel_renderer.models.schemas import RenderRequest, RenderResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Rendering"])


class MissingHTMLError(Exception):
    """Raised when a render request carries no HTML."""

    pass


@router.post("/render", response_model=RenderResponse)
async def render_slide(payload: RenderRequest) -> RenderResponse:
    """
    Render HTML to a PNG screenshot.

    Args:
        payload: Request body with the HTML document

    Returns:
        Base64 encoded PNG and the slide dimensions

    Raises:
        MissingHTMLError: If ``html`` is missing or empty
        PNGGenerationError: If the browser fails to render the page
    """
    if not payload.html:
        raise MissingHTMLError()

    logger.info("Rendering carousel slide", html_length=len(payload.html))

    png_result = await generate_png_from_html(payload.html)

    logger.info("Render complete", file_size=png_result.file_size)

    return RenderResponse(
        success=True,
        image=png_result.base64_data,
        width=png_result.width,
        height=png_result.height,
        format="png",
    )

"""
Pydantic Models and Schemas
===========================

API request/response models and the internal PNG result structure.
"""

from typing import Optional, Dict, Any, Literal

from pydantic import BaseModel, Field


RENDER_USAGE = 'POST /render with {"html": "<html>...</html>"}'


# Rendering Models
class PNGResult(BaseModel):
    """Result of PNG generation."""
    png_data: bytes = Field(..., description="PNG binary data", exclude=True)
    base64_data: str = Field(..., description="Base64 encoded PNG data")
    width: int = Field(..., description="Image width in CSS pixels")
    height: int = Field(..., description="Image height in CSS pixels")
    pixel_width: int = Field(..., description="Image width in physical pixels")
    pixel_height: int = Field(..., description="Image height in physical pixels")
    file_size: int = Field(..., description="File size in bytes")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Generation metadata")


# API Request/Response Models
class RenderRequest(BaseModel):
    """Request model for HTML to PNG rendering.

    ``html`` is optional at the schema level so that a missing value reaches
    the route and gets the usage hint instead of a generic validation error.
    """
    html: Optional[str] = Field(None, description="Complete HTML document to render")


class RenderResponse(BaseModel):
    """Response model for a successful render."""
    success: Literal[True] = Field(True, description="Always true on success")
    image: str = Field(..., description="Base64 encoded PNG screenshot")
    width: int = Field(..., description="Slide width in CSS pixels")
    height: int = Field(..., description="Slide height in CSS pixels")
    format: Literal["png"] = Field("png", description="Image format")


class HealthResponse(BaseModel):
    """Health check payload."""
    status: Literal["ready"] = Field("ready", description="Service status")
    message: str = Field(..., description="Human readable status message")
    version: str = Field(..., description="Application version")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error summary")
    message: Optional[str] = Field(None, description="Underlying error message")
    usage: Optional[str] = Field(None, description="Usage hint for client errors")

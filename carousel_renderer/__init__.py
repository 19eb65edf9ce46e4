"""
Carousel Renderer
=================

HTTP service that turns an HTML document into a fixed-size PNG screenshot
for social-media carousel slides (1080x1350, 4:5 portrait, rendered at 2x).

This package provides:
- FastAPI REST endpoints for HTTP access
- Browser automation with Playwright, one Chromium process per render
"""

__version__ = "1.0.0"
__author__ = "Carousel Renderer Team"

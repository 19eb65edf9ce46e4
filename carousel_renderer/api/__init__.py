"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to slide rendering.

Endpoints:
- GET /: Health check endpoint
- POST /render: HTML to PNG conversion
"""

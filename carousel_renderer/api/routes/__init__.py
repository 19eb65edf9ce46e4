"""
API Routes
==========

Routers mounted by the FastAPI application.

Routes:
- health: GET / readiness payload
- render: POST /render HTML to PNG conversion
"""

"""
Data Models
===========

Pydantic models for API requests, responses, and rendering results.
"""

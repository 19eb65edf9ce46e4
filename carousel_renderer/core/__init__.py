"""
Core Business Logic
===================

Rendering of HTML documents to PNG screenshots.
"""

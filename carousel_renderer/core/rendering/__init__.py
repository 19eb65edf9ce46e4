"""
Rendering Module
===============

PNG creation with browser automation.

Components:
- png_generator: Browser automation for PNG screenshot generation
"""

"""
Brush Editor - UI Module

Renderer-facing helpers.  Only the brush mesh builder lives here; windowing
and GPU upload belong to the host application.
"""

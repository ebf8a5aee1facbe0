"""
Brush Editor

Convex brush geometry kernel and editing tools: plane-set brushes, polyhedron
derivation, paraxial UVs, convex hull rebuilds and convex subtraction.
"""

__version__ = "0.1.0"

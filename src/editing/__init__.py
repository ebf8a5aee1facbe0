"""
Brush editing layer.

Owns all mutable editor state: the brush document, drag gestures and the
undo/redo history.  Geometry edits themselves are pure functions in
``operations``.
"""

from .document import BrushDocument, PlacedBrush
from .commands import (
    Command,
    CommandManager,
    SetBrushCommand,
    AddBrushCommand,
    RemoveBrushCommand,
    SubtractBrushesCommand,
)
from .operations import (
    CutResult,
    Edge,
    add_drawn_brush,
    brush_edges,
    clip_brush,
    clip_plane_from_points,
    cut_brushes,
    cut_document,
    draw_brush,
    move_edges,
    move_faces,
    move_vertices,
    remove_edges,
    remove_faces,
    remove_vertices,
    split_points,
    split_vertex,
)
from .drag import DragConstraint, DragPhase, DragSession, drag_offset, face_drag_amount

__all__ = [
    'BrushDocument',
    'PlacedBrush',
    'Command',
    'CommandManager',
    'SetBrushCommand',
    'AddBrushCommand',
    'RemoveBrushCommand',
    'SubtractBrushesCommand',
    'CutResult',
    'Edge',
    'add_drawn_brush',
    'brush_edges',
    'clip_brush',
    'clip_plane_from_points',
    'cut_brushes',
    'cut_document',
    'draw_brush',
    'move_edges',
    'move_faces',
    'move_vertices',
    'remove_edges',
    'remove_faces',
    'remove_vertices',
    'split_points',
    'split_vertex',
    'DragConstraint',
    'drag_offset',
    'DragPhase',
    'DragSession',
    'face_drag_amount',
]

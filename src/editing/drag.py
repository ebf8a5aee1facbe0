"""
Drag state machine for brush sub-element edits.

The edit tooling owns one DragSession per gesture:

    IDLE --press--> PENDING --move past threshold--> DRAGGING
    DRAGGING --release--> COMMITTED   (yields a SetBrushCommand)
    PENDING/DRAGGING --cancel--> CANCELLED   (start snapshot restored)

Every update is recomputed from the start snapshot, never from the previous
frame.  When the edit function rejects an amount the brush freezes at its
last valid shape.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from brush_editor.geometry.brush import Brush
from brush_editor.geometry.plane_math import Vec2, Vec3, add, scale
from brush_editor.settings import EDITOR_SETTINGS

from .commands import SetBrushCommand
from .operations import Edge, move_edges, move_faces, move_vertices, split_vertex

logger = logging.getLogger(__name__)

EditFn = Callable[[Brush, Any], Optional[Brush]]


class DragPhase(Enum):
    IDLE = "idle"
    PENDING = "pending"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


def face_drag_amount(projected_pixels: float, camera_distance: float,
                     sensitivity: Optional[float] = None) -> float:
    """Convert cursor travel along the projected face normal into world units."""
    if sensitivity is None:
        sensitivity = EDITOR_SETTINGS.face_drag_sensitivity()
    return projected_pixels * camera_distance * sensitivity


class DragConstraint(Enum):
    """Restriction on vertex and edge drags (toggled by the X, Y and Z keys)."""
    FREE = "free"
    AXIS_X = "x"
    AXIS_Y = "y"
    AXIS_Z = "z"

    def __str__(self) -> str:
        return self.value


_CONSTRAINT_AXES = {
    DragConstraint.AXIS_X: (1.0, 0.0, 0.0),
    DragConstraint.AXIS_Y: (0.0, 1.0, 0.0),
    DragConstraint.AXIS_Z: (0.0, 0.0, 1.0),
}


def drag_offset(constraint: DragConstraint, mouse_delta: Vec2, camera_distance: float,
                camera_right: Vec3, camera_up: Vec3,
                screen_axis: Optional[Vec2] = None,
                sensitivity: Optional[float] = None) -> Optional[Vec3]:
    """Map cursor travel since the drag started to a brush-space offset.

    FREE moves in the camera plane; screen y grows downward so it is
    negated.  An axis constraint projects the cursor travel onto
    ``screen_axis``, the on-screen direction of that axis, and moves along
    the axis only.  Returns None when an axis constraint has no screen
    direction (the axis could not be projected).
    """
    if sensitivity is None:
        sensitivity = EDITOR_SETTINGS.face_drag_sensitivity()
    k = camera_distance * sensitivity
    dx, dy = mouse_delta

    if constraint == DragConstraint.FREE:
        return add(scale(camera_right, dx * k), scale(camera_up, -dy * k))

    if screen_axis is None:
        return None
    axis_len = math.hypot(screen_axis[0], screen_axis[1])
    if axis_len < 1e-12:
        return (0.0, 0.0, 0.0)
    projected = (dx * screen_axis[0] + dy * screen_axis[1]) / axis_len
    return scale(_CONSTRAINT_AXES[constraint], projected * k)


class DragSession:
    """One press-drag-release gesture on a single brush."""

    def __init__(self, brush_id: str, start_brush: Brush, edit: EditFn,
                 threshold: Optional[float] = None, label: str = "Edit brush"):
        self.brush_id = brush_id
        self.start_brush = start_brush.copy()
        self.current = start_brush.copy()
        # Pixels the cursor must travel before a press becomes a drag
        self.threshold = EDITOR_SETTINGS.drag_threshold() if threshold is None else threshold
        self.label = label
        self.phase = DragPhase.IDLE
        self._edit = edit
        self._press_pos: Optional[Vec2] = None

    # ------------------------------------------------------------------
    # Factories for the sub-element modes
    # ------------------------------------------------------------------

    @classmethod
    def for_faces(cls, brush_id: str, brush: Brush, face_indices: Iterable[int],
                  **kwargs) -> 'DragSession':
        faces = list(face_indices)
        return cls(brush_id, brush, lambda b, amount: move_faces(b, faces, amount),
                   label="Move brush face", **kwargs)

    @classmethod
    def for_vertices(cls, brush_id: str, brush: Brush, vertex_indices: Iterable[int],
                     **kwargs) -> 'DragSession':
        verts = list(vertex_indices)
        return cls(brush_id, brush, lambda b, delta: move_vertices(b, verts, delta),
                   label="Move brush vertex", **kwargs)

    @classmethod
    def for_edges(cls, brush_id: str, brush: Brush, edges: Iterable[Edge],
                  **kwargs) -> 'DragSession':
        edge_list = list(edges)
        return cls(brush_id, brush, lambda b, delta: move_edges(b, edge_list, delta),
                   label="Move brush edge", **kwargs)

    @classmethod
    def for_split(cls, brush_id: str, brush: Brush, position: Vec3,
                  **kwargs) -> 'DragSession':
        """Drag a new vertex out of an edge midpoint or face centre."""
        return cls(brush_id, brush, lambda b, delta: split_vertex(b, position, delta),
                   label="Split brush vertex", **kwargs)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.phase in (DragPhase.PENDING, DragPhase.DRAGGING)

    def press(self, cursor: Vec2) -> bool:
        if self.phase != DragPhase.IDLE:
            return False
        self._press_pos = cursor
        self.phase = DragPhase.PENDING
        return True

    def move(self, cursor: Vec2, amount: Any) -> Brush:
        """Feed a cursor position and the edit amount it maps to.

        Returns the brush to display this frame.
        """
        if self.phase == DragPhase.PENDING:
            travelled = math.hypot(cursor[0] - self._press_pos[0], cursor[1] - self._press_pos[1])
            if travelled > self.threshold:
                self.phase = DragPhase.DRAGGING
                logger.debug("Drag started on %s", self.brush_id)

        if self.phase == DragPhase.DRAGGING:
            edited = self._edit(self.start_brush, amount)
            if edited is not None:
                self.current = edited
        return self.current

    def release(self) -> Optional[SetBrushCommand]:
        """Finish the gesture.  Returns the undo command if the brush changed."""
        if self.phase == DragPhase.PENDING:
            self.phase = DragPhase.IDLE
            return None
        if self.phase != DragPhase.DRAGGING:
            return None
        self.phase = DragPhase.COMMITTED
        if self.current == self.start_brush:
            return None
        return SetBrushCommand(brush_id=self.brush_id, old=self.start_brush.copy(),
                               new=self.current.copy(), label=self.label)

    def cancel(self) -> Brush:
        """Abort the gesture and hand back the untouched start snapshot."""
        if self.is_active:
            self.phase = DragPhase.CANCELLED
        self.current = self.start_brush.copy()
        return self.current

"""
Editable brush document.

Holds the placed brushes the editing tools operate on.  Each brush is kept in
its own local space with a world translation, as the cut tool re-centres
fragments around their centroid.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from brush_editor.geometry.brush import Brush
from brush_editor.geometry.plane_math import Vec3


@dataclass
class PlacedBrush:
    """A brush plus its placement in the world."""
    id: str
    brush: Brush
    origin: Vec3 = (0.0, 0.0, 0.0)
    name: str = "Brush"

    @staticmethod
    def create(brush: Brush, origin: Vec3 = (0.0, 0.0, 0.0), name: str = "Brush") -> 'PlacedBrush':
        """Factory method to create a new placed brush with a fresh id."""
        return PlacedBrush(id=str(uuid.uuid4()), brush=brush, origin=origin, name=name)

    def snapshot(self) -> 'PlacedBrush':
        return PlacedBrush(id=self.id, brush=self.brush.copy(), origin=self.origin, name=self.name)

    def world_brush(self) -> Brush:
        """The brush with its planes moved into world space."""
        return self.brush.translated(self.origin)


@dataclass
class BrushDocument:
    """Ordered collection of placed brushes, keyed by id."""
    brushes: Dict[str, PlacedBrush] = field(default_factory=dict)

    def add(self, placed: PlacedBrush) -> bool:
        """Add a brush.  Returns False if the id is already present."""
        if placed.id in self.brushes:
            return False
        self.brushes[placed.id] = placed
        return True

    def remove(self, brush_id: str) -> Optional[PlacedBrush]:
        return self.brushes.pop(brush_id, None)

    def get(self, brush_id: str) -> Optional[PlacedBrush]:
        return self.brushes.get(brush_id)

    def replace_brush(self, brush_id: str, brush: Brush) -> bool:
        """Swap in a whole new brush value for an existing entry."""
        placed = self.brushes.get(brush_id)
        if placed is None:
            return False
        placed.brush = brush.copy()
        return True

    def ids(self) -> List[str]:
        return list(self.brushes)

    def __contains__(self, brush_id: str) -> bool:
        return brush_id in self.brushes

    def __iter__(self) -> Iterator[PlacedBrush]:
        return iter(list(self.brushes.values()))

    def __len__(self) -> int:
        return len(self.brushes)

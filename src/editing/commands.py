"""
Command pattern implementation for undo/redo of brush edits.

Every command stores whole-brush snapshots rather than deltas.

Provides:
- Command ABC for all document operations
- CommandManager for undo/redo stack management
- Concrete commands: SetBrush, AddBrush, RemoveBrush, SubtractBrushes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from brush_editor.geometry.brush import Brush
from brush_editor.settings import EDITOR_SETTINGS

if TYPE_CHECKING:
    from .document import BrushDocument, PlacedBrush


class Command(ABC):
    """Abstract base class for undoable commands."""

    @abstractmethod
    def execute(self, document: 'BrushDocument') -> bool:
        """
        Execute the command.

        Returns:
            True if execution succeeded, False otherwise.
        """
        pass

    @abstractmethod
    def undo(self, document: 'BrushDocument') -> bool:
        """
        Undo the command.

        Returns:
            True if undo succeeded, False otherwise.
        """
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of this command."""
        pass


@dataclass
class SetBrushCommand(Command):
    """Replace one brush's faces; old and new are full snapshots."""

    brush_id: str
    old: Brush
    new: Brush
    label: str = "Edit brush"

    def execute(self, document: 'BrushDocument') -> bool:
        return document.replace_brush(self.brush_id, self.new)

    def undo(self, document: 'BrushDocument') -> bool:
        return document.replace_brush(self.brush_id, self.old)

    @property
    def description(self) -> str:
        return self.label


@dataclass
class AddBrushCommand(Command):
    """Add a new brush (e.g. drawn in Add mode)."""

    placed: 'PlacedBrush'

    def execute(self, document: 'BrushDocument') -> bool:
        return document.add(self.placed.snapshot())

    def undo(self, document: 'BrushDocument') -> bool:
        return document.remove(self.placed.id) is not None

    @property
    def description(self) -> str:
        return "Draw brush"


@dataclass
class RemoveBrushCommand(Command):
    """Remove a brush from the document."""

    brush_id: str

    # Saved state for undo
    _saved: Optional['PlacedBrush'] = field(default=None, repr=False)

    def execute(self, document: 'BrushDocument') -> bool:
        placed = document.remove(self.brush_id)
        if placed is None:
            return False
        self._saved = placed.snapshot()
        return True

    def undo(self, document: 'BrushDocument') -> bool:
        if self._saved is None:
            return False
        return document.add(self._saved.snapshot())

    @property
    def description(self) -> str:
        return "Delete brush"


@dataclass
class SubtractBrushesCommand(Command):
    """Swap every cut original for its fragments as one reversible step."""

    originals: List['PlacedBrush'] = field(default_factory=list)
    fragments: List['PlacedBrush'] = field(default_factory=list)

    def execute(self, document: 'BrushDocument') -> bool:
        for placed in self.originals:
            document.remove(placed.id)
        for placed in self.fragments:
            document.add(placed.snapshot())
        return True

    def undo(self, document: 'BrushDocument') -> bool:
        for placed in self.fragments:
            document.remove(placed.id)
        for placed in self.originals:
            document.add(placed.snapshot())
        return True

    @property
    def description(self) -> str:
        return "Subtract brush"


class CommandManager:
    """
    Manages command execution with undo/redo stacks.

    Usage:
        manager = CommandManager()
        manager.execute(SetBrushCommand(...), document)
        manager.undo(document)  # Restore the old snapshot
        manager.redo(document)  # Apply the new snapshot again
    """

    def __init__(self, max_undo_depth: Optional[int] = None):
        self._undo_stack: List[Command] = []
        self._redo_stack: List[Command] = []
        if max_undo_depth is None:
            max_undo_depth = EDITOR_SETTINGS.undo_depth()
        self._max_depth = max_undo_depth

    def execute(self, command: Command, document: 'BrushDocument') -> bool:
        """
        Execute a command and add it to the undo stack.

        Returns:
            True if command executed successfully.
        """
        if command.execute(document):
            self._undo_stack.append(command)
            self._redo_stack.clear()  # Clear redo stack on new command

            # Limit stack size
            if len(self._undo_stack) > self._max_depth:
                self._undo_stack.pop(0)

            return True
        return False

    def undo(self, document: 'BrushDocument') -> Optional[str]:
        """
        Undo the last command.

        Returns:
            Description of undone command, or None if nothing to undo.
        """
        if not self._undo_stack:
            return None

        command = self._undo_stack.pop()
        if command.undo(document):
            self._redo_stack.append(command)
            return command.description
        # Undo failed, put command back
        self._undo_stack.append(command)
        return None

    def redo(self, document: 'BrushDocument') -> Optional[str]:
        """
        Redo the last undone command.

        Returns:
            Description of redone command, or None if nothing to redo.
        """
        if not self._redo_stack:
            return None

        command = self._redo_stack.pop()
        if command.execute(document):
            self._undo_stack.append(command)
            return command.description
        # Redo failed, put command back
        self._redo_stack.append(command)
        return None

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_description(self) -> Optional[str]:
        """Get description of command that would be undone."""
        if self._undo_stack:
            return self._undo_stack[-1].description
        return None

    @property
    def redo_description(self) -> Optional[str]:
        """Get description of command that would be redone."""
        if self._redo_stack:
            return self._redo_stack[-1].description
        return None

    def clear(self):
        """Clear all undo/redo history."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

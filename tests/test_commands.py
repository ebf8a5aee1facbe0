from brush_editor.editing.commands import (
    AddBrushCommand,
    CommandManager,
    RemoveBrushCommand,
    SetBrushCommand,
)
from brush_editor.editing.document import BrushDocument, PlacedBrush
from brush_editor.geometry.brush import Brush


def _document_with(brush):
    document = BrushDocument()
    placed = PlacedBrush.create(brush)
    document.add(placed)
    return document, placed.id


def test_set_brush_undo_redo(cube):
    document, brush_id = _document_with(cube)
    bigger = Brush.cuboid(2.0, 2.0, 2.0)
    manager = CommandManager(max_undo_depth=10)

    assert manager.execute(SetBrushCommand(brush_id, cube, bigger, label="Scale"), document)
    assert document.get(brush_id).brush == bigger

    assert manager.undo(document) == "Scale"
    assert document.get(brush_id).brush == cube
    assert manager.redo_description == "Scale"

    assert manager.redo(document) == "Scale"
    assert document.get(brush_id).brush == bigger


def test_set_brush_on_missing_id_is_not_recorded(cube):
    document = BrushDocument()
    manager = CommandManager(max_undo_depth=10)
    assert not manager.execute(SetBrushCommand("missing", cube, cube), document)
    assert not manager.can_undo


def test_empty_stacks_return_none():
    manager = CommandManager(max_undo_depth=10)
    document = BrushDocument()
    assert manager.undo(document) is None
    assert manager.redo(document) is None
    assert manager.undo_description is None


def test_new_command_clears_redo(cube):
    document, brush_id = _document_with(cube)
    manager = CommandManager(max_undo_depth=10)
    manager.execute(SetBrushCommand(brush_id, cube, Brush.cuboid(2, 2, 2)), document)
    manager.undo(document)
    assert manager.can_redo

    manager.execute(SetBrushCommand(brush_id, cube, Brush.cuboid(3, 3, 3)), document)
    assert not manager.can_redo


def test_undo_depth_limit(cube):
    document, brush_id = _document_with(cube)
    manager = CommandManager(max_undo_depth=2)
    for size in (2.0, 3.0, 4.0):
        current = document.get(brush_id).brush
        manager.execute(SetBrushCommand(brush_id, current, Brush.cuboid(size, size, size)), document)

    assert manager.undo_count == 2
    manager.undo(document)
    manager.undo(document)
    # The oldest edit fell off the stack
    assert document.get(brush_id).brush == Brush.cuboid(2.0, 2.0, 2.0)
    assert not manager.can_undo


def test_add_and_remove_brush(cube):
    document = BrushDocument()
    manager = CommandManager(max_undo_depth=10)
    placed = PlacedBrush.create(cube, origin=(1.0, 2.0, 3.0))

    manager.execute(AddBrushCommand(placed), document)
    assert placed.id in document
    manager.execute(RemoveBrushCommand(placed.id), document)
    assert len(document) == 0

    assert manager.undo(document) == "Delete brush"
    assert document.get(placed.id).origin == (1.0, 2.0, 3.0)
    assert manager.undo(document) == "Draw brush"
    assert len(document) == 0


def test_document_rejects_duplicate_ids(cube):
    document, brush_id = _document_with(cube)
    assert not document.add(PlacedBrush(id=brush_id, brush=cube))
    assert document.ids() == [brush_id]


def test_snapshots_are_independent(cube):
    placed = PlacedBrush.create(cube)
    snapshot = placed.snapshot()
    placed.brush.faces.pop()
    assert snapshot.brush.face_count == 6

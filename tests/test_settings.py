import pytest

from brush_editor.settings import DEFAULTS, EditorSettings


@pytest.fixture
def settings(tmp_path):
    return EditorSettings(str(tmp_path / "editor.ini"))


def test_defaults(settings):
    assert settings.drag_threshold() == 5.0
    assert settings.face_drag_sensitivity() == 0.003
    assert settings.undo_depth() == 100
    assert settings.get_all() == DEFAULTS


def test_values_persist(tmp_path):
    path = str(tmp_path / "editor.ini")
    EditorSettings(path).set_value("drag_threshold", 8.0)
    EditorSettings(path).set_value("undo_depth", 25)

    reopened = EditorSettings(path)
    assert reopened.drag_threshold() == 8.0
    assert reopened.undo_depth() == 25


def test_reset_to_defaults(settings):
    settings.set_value("face_drag_sensitivity", 0.01)
    settings.reset_to_defaults()
    assert settings.face_drag_sensitivity() == 0.003


def test_unknown_key(settings):
    with pytest.raises(KeyError):
        settings.get_value("grid_size")
    with pytest.raises(KeyError):
        settings.set_value("grid_size", 8)

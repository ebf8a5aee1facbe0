"""
Persistent editor preferences.

Usage:
    from brush_editor.settings import EDITOR_SETTINGS

    threshold = EDITOR_SETTINGS.drag_threshold()
"""

from .editor_settings import (
    EditorSettings,
    EDITOR_SETTINGS,
    DEFAULTS,
)

__all__ = [
    'EditorSettings',
    'EDITOR_SETTINGS',
    'DEFAULTS',
]

"""
Editor tool preferences stored in QSettings.

Only interaction tuning lives here (drag threshold, drag sensitivity, undo
depth).  Geometric tolerances are fixed constants in the kernel.

Usage:
    from brush_editor.settings import EDITOR_SETTINGS

    threshold = EDITOR_SETTINGS.drag_threshold()
    EDITOR_SETTINGS.set_value("drag_threshold", 8.0)
"""

from typing import Dict, Optional, Union

from PyQt5.QtCore import QSettings

Number = Union[int, float]

# Default values for every known key
DEFAULTS: Dict[str, Number] = {
    "drag_threshold": 5.0,
    "face_drag_sensitivity": 0.003,
    "undo_depth": 100,
}


class EditorSettings:
    """Editor preferences backed by QSettings.

    With ``ini_path`` the values go to that INI file instead of the
    platform's native store (used by tests).

    Note: QSettings is accessed lazily to avoid issues with object lifetime
    in test environments where QApplication may not persist.
    """

    def __init__(self, ini_path: Optional[str] = None):
        self._ini_path = ini_path
        self._settings = None

    def _get_settings(self) -> QSettings:
        """Get or create the QSettings instance.

        Recreates the object when the underlying C++ instance has been deleted.
        """
        try:
            if self._settings is not None:
                # Will throw if deleted
                self._settings.organizationName()
                return self._settings
        except RuntimeError:
            pass

        if self._ini_path is not None:
            self._settings = QSettings(self._ini_path, QSettings.IniFormat)
        else:
            self._settings = QSettings("BrushEditor", "Editor")
        return self._settings

    def get_value(self, key: str) -> Number:
        """Stored value for ``key``, or its default if unset or unreadable."""
        if key not in DEFAULTS:
            raise KeyError(f"Unknown editor setting: {key}")
        default = DEFAULTS[key]
        try:
            value = self._get_settings().value(f"editor/{key}", default, type=type(default))
        except (RuntimeError, TypeError):
            # QSettings not available or value not convertible, use default
            return default
        return value

    def set_value(self, key: str, value: Number):
        if key not in DEFAULTS:
            raise KeyError(f"Unknown editor setting: {key}")
        try:
            settings = self._get_settings()
            settings.setValue(f"editor/{key}", value)
            settings.sync()
        except RuntimeError:
            # QSettings not available, ignore
            pass

    def drag_threshold(self) -> float:
        return float(self.get_value("drag_threshold"))

    def face_drag_sensitivity(self) -> float:
        return float(self.get_value("face_drag_sensitivity"))

    def undo_depth(self) -> int:
        return int(self.get_value("undo_depth"))

    def get_all(self) -> Dict[str, Number]:
        return {key: self.get_value(key) for key in DEFAULTS}

    def reset_to_defaults(self):
        """Clear all stored values, reverting to defaults."""
        try:
            settings = self._get_settings()
            for key in DEFAULTS:
                settings.remove(f"editor/{key}")
            settings.sync()
        except RuntimeError:
            pass


# Global singleton instance
EDITOR_SETTINGS = EditorSettings()


__all__ = [
    'EditorSettings',
    'EDITOR_SETTINGS',
    'DEFAULTS',
]

from __future__ import annotations

import os
import pytest

# Qt offscreen so these tests work in headless CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore, QtWidgets


@pytest.fixture(scope="session")
def qapp():
    """Ensure a QApplication exists (QUndoStack / QSettings live under it)."""
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def ini_settings(tmp_path, qapp):
    """A QSettings backed by a throwaway INI file."""
    return QtCore.QSettings(str(tmp_path / "settings.ini"), QtCore.QSettings.IniFormat)

import os
import sys

import pytest
from PySide6.QtWidgets import QApplication

from storyboard_manager.utils.models import Scene

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def q_app():
    """
    Ensure a QApplication exists for the entire test session.
    """
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app


@pytest.fixture
def make_scene():
    """
    Returns a factory building scenes with sensible defaults.
    """
    counter = {"n": 0}

    def _make(code="001", **kwargs):
        counter["n"] += 1
        kwargs.setdefault("id", f"scene-{counter['n']}")
        return Scene(code=code, **kwargs)

    return _make


@pytest.fixture
def image_file(tmp_path):
    """
    Writes a small fake image file and returns its path.
    """
    def _write(name="shot.png", data=b"\x89PNG fake"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _write

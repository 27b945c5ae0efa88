import pytest
from PyQt5.QtCore import QCoreApplication

from revolution_editor.state_manager import EditorStateManager


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def state_manager():
    return EditorStateManager()

import pytest
from loguru import logger

from scriptevents.app.app import App
from scriptevents.app.doc import Doc, Sprite


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def app(tmp_path):
    """Fresh application per test; torn down through the exit signal."""
    application = App(str(tmp_path / "config.json"))
    yield application
    application.exit()


@pytest.fixture
def make_doc(app):
    """Factory for documents opened in the test app's context."""
    def _make(filename: str = "sprite.png", width: int = 32, height: int = 32) -> Doc:
        doc = Doc(Sprite(width, height), filename=filename)
        app.context.add_document(doc)
        return doc
    return _make


@pytest.fixture
def doc(make_doc):
    return make_doc()

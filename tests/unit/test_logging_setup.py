import logging

import pytest

from docylit.logging_setup import DocylitHandler, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.captureWarnings(False)


def test_installs_single_rich_handler(restore_root_logger, monkeypatch):
    monkeypatch.delenv("DOCYLIT_LOG_LEVEL", raising=False)
    configure_logging()
    configure_logging()

    managed = [h for h in restore_root_logger.handlers if isinstance(h, DocylitHandler)]
    assert len(managed) == 1
    assert restore_root_logger.level == logging.INFO


def test_level_from_environment(restore_root_logger, monkeypatch):
    monkeypatch.setenv("DOCYLIT_LOG_LEVEL", "debug")
    configure_logging()
    assert restore_root_logger.level == logging.DEBUG

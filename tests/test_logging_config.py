import logging

import pytest

from song_library_api.app.core.logging_config import resolve_level, setup_logging


@pytest.fixture
def root_logger():
    """Restore the root and uvicorn loggers after each test."""
    root = logging.getLogger()
    uvicorn = logging.getLogger("uvicorn")
    saved = (root.level, list(root.handlers), uvicorn.level)
    yield root
    for handler in root.handlers:
        if handler not in saved[1]:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved[0])
    uvicorn.setLevel(saved[2])


@pytest.mark.unit
def test_level_is_applied_when_handlers_already_exist(root_logger):
    root_logger.addHandler(logging.NullHandler())
    handlers_before = list(root_logger.handlers)

    setup_logging("DEBUG")
    assert root_logger.level == logging.DEBUG
    assert logging.getLogger("uvicorn").level == logging.DEBUG

    setup_logging("warning")
    assert root_logger.level == logging.WARNING
    assert root_logger.handlers == handlers_before


@pytest.mark.unit
def test_unknown_level_falls_back_to_info():
    assert resolve_level("LOUD") == logging.INFO
    assert resolve_level("error") == logging.ERROR


@pytest.mark.unit
def test_logfile_is_attached_once(root_logger, tmp_path):
    logfile = tmp_path / "songs.log"
    setup_logging("INFO", str(logfile))
    setup_logging("INFO", str(logfile))

    file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logging.getLogger("song_library_api.test").info("catalogue ready")
    file_handlers[0].flush()
    assert "catalogue ready" in logfile.read_text(encoding="utf-8")

import logging

import pytest

from comboprice.config import DEBUG_LOG_PATH, debug_log_path
from comboprice.main import configure_logging, main


def test_debug_log_path_env_override(monkeypatch, tmp_path):
    monkeypatch.delenv("COMBOPRICE_DEBUG_LOG", raising=False)
    assert debug_log_path() == DEBUG_LOG_PATH

    monkeypatch.setenv("COMBOPRICE_DEBUG_LOG", str(tmp_path / "debug.log"))
    assert debug_log_path() == str(tmp_path / "debug.log")


def test_configure_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "combo.log"
    configure_logging(str(log_file))
    package_logger = logging.getLogger("comboprice")
    try:
        logging.getLogger("comboprice.session").info("session finalized combo=test")
        for handler in package_logger.handlers:
            handler.flush()
        assert "session finalized combo=test" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(package_logger.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_file):
                package_logger.removeHandler(handler)
                handler.close()


def test_main_rejects_unknown_combo():
    with pytest.raises(SystemExit):
        main(["no_such_combo"])

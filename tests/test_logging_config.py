import logging

from PySide6.QtCore import QSettings

from guardiao.app.application import resolve_log_file
from guardiao.config import SETTINGS_LOG_FILE_KEY
from guardiao.logging_config import QUIET_LOGGERS, setup_logging


def test_log_file_receives_package_records(tmp_path):
    log_file = tmp_path / "guardiao.log"
    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    try:
        logging.getLogger("guardiao.model.io").debug("reading territories")
        for handler in logging.getLogger("guardiao").handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "guardiao.model.io - DEBUG - reading territories" in text
        assert all(logging.getLogger(name).level == logging.WARNING for name in QUIET_LOGGERS)
    finally:
        setup_logging(level=logging.INFO)


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging()
    setup_logging()
    assert len(logging.getLogger("guardiao").handlers) == 1


def test_log_file_setting(qapp, tmp_path):
    settings = QSettings(str(tmp_path / "guardiao.ini"), QSettings.Format.IniFormat)
    assert resolve_log_file(settings) is None
    settings.setValue(SETTINGS_LOG_FILE_KEY, "/tmp/guardiao.log")
    assert resolve_log_file(settings) == "/tmp/guardiao.log"

"""
Logging Configuration
Sets up the 'guardiao' logger once at startup.
"""
import logging
import sys
from typing import Optional

# Third-party loggers that are only interesting when something goes wrong
QUIET_LOGGERS = ("urllib3", "requests", "pyqtgraph")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach a stdout handler (and optionally a UTF-8 log file) to the package logger.

    Args:
        level: Logging level for the 'guardiao' namespace.
        log_file: Optional path, overwritten on every start.
    """
    logger = logging.getLogger("guardiao")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # HTTP connection chatter from requests would drown the load messages at DEBUG
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging initialized (level {logging.getLevelName(level)}"
                f"{', file ' + log_file if log_file else ''}).")

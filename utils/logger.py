import logging
import sys

LOGGER_NAME = "musictime"

_logger = logging.getLogger(LOGGER_NAME)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the console handler used by the log_* helpers.

    Safe to call more than once; only the level changes on later calls.
    """
    numeric_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)

    if not _logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S"))
        _logger.addHandler(handler)
        _logger.propagate = False

    _logger.setLevel(numeric_level)
    return _logger


def log_debug(message: str):
    _logger.debug(message)


def log_info(message: str):
    _logger.info(message)


def log_success(message: str):
    _logger.info(f"✅ {message}")


def log_warning(message: str):
    _logger.warning(f"⚠️ {message}")


def log_error(message: str):
    _logger.error(f"❌ {message}")

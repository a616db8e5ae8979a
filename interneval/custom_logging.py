import logging
from enum import StrEnum

LOG_FORMAT_DEBUG = "%(levelname)s - %(message)s - %(pathname)s - %(funcName)s %(lineno)d"
LOG_FORMAT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "urllib3", "google.auth", "grpc")

class LogLevels(StrEnum):
    debug = "DEBUG"
    info = "INFO"
    warn = "WARNING"
    error = "ERROR"

def configure_logging(log_level: str = LogLevels.error) -> int:
    """
    Configure root logging for the API process and return the applied level
    """
    log_level = str(log_level).upper()
    valid_levels = [level.value for level in LogLevels]

    if log_level not in valid_levels:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT_DEFAULT)
        return logging.ERROR

    level_map = {
        LogLevels.debug: logging.DEBUG,
        LogLevels.info: logging.INFO,
        LogLevels.warn: logging.WARNING,
        LogLevels.error: logging.ERROR,
    }
    level = level_map[LogLevels(log_level)]

    if level == logging.DEBUG:
        logging.basicConfig(level=level, format=LOG_FORMAT_DEBUG)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT_DEFAULT)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return level

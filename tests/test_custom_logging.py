import logging

import pytest

from interneval.custom_logging import LogLevels, NOISY_LOGGERS, configure_logging


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    (LogLevels.info, logging.INFO),
    ("WARNING", logging.WARNING),
    ("verbose", logging.ERROR),
])
def test_configure_logging_levels(level, expected):
    assert configure_logging(level) == expected


def test_client_loggers_quieted():
    configure_logging(LogLevels.info)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING

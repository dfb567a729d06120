"""
Test Logging Configuration
"""

import logging

import pytest

from clansite.config import Settings
from clansite.logging_config import STORAGE_LOGGERS, setup_logging


@pytest.fixture
def restore_logging():
    yield
    setup_logging(Settings(DEBUG=False))


def test_app_logger_follows_debug_flag(restore_logging):
    setup_logging(Settings(DEBUG=True))
    assert logging.getLogger("clansite").level == logging.DEBUG

    setup_logging(Settings(DEBUG=False))
    assert logging.getLogger("clansite").level == logging.INFO


@pytest.mark.parametrize("name", STORAGE_LOGGERS)
def test_storage_drivers_stay_at_warning_in_debug(restore_logging, name):
    setup_logging(Settings(DEBUG=True))

    driver_logger = logging.getLogger(name)

    assert driver_logger.level == logging.WARNING
    assert driver_logger.propagate is False
    assert [type(h) for h in driver_logger.handlers] == [logging.StreamHandler]

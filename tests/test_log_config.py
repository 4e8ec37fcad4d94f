import logging

from log_config import APP_LOGGER_NAME, LOGGER_NAMES, setup_logging


def test_setup_logging_is_idempotent():
    logger = setup_logging(logging.DEBUG)
    setup_logging(logging.DEBUG)

    assert logger.name == APP_LOGGER_NAME
    for name in LOGGER_NAMES:
        configured = logging.getLogger(name)
        assert len(configured.handlers) == 1
        assert configured.level == logging.DEBUG
        assert configured.propagate is False


def test_setup_logging_updates_level():
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.WARNING)
    assert logger.level == logging.WARNING
    assert logging.getLogger("calc").level == logging.WARNING

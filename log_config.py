import logging

APP_LOGGER_NAME = "llm_calculator"
# calc logs under its module name
LOGGER_NAMES = (APP_LOGGER_NAME, "calc")
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logging(level=logging.INFO):
    """
    Configure the app loggers and return the app logger.

    Streamlit reruns the script on every widget change, so a handler is only
    attached the first time.
    """
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)
        logger.propagate = False
    return logging.getLogger(APP_LOGGER_NAME)

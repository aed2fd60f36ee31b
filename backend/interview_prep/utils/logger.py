import logging

PACKAGE_LOGGER = "interview_prep"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stream handler to the package logger. Safe to call more than once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    if not any(getattr(h, "_interview_prep", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._interview_prep = True
        logger.addHandler(handler)
    return logger

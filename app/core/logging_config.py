import logging
import os
from logging.handlers import TimedRotatingFileHandler

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO.
QUIET_LOGGERS = ("sqlalchemy", "uvicorn.access", "passlib")


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach console (and optionally rotating file) handlers to the ``app`` logger.

    Safe to call more than once: handlers are only installed the first time.
    """
    logger = logging.getLogger("app")
    logger.setLevel(settings.log_level.upper())

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            os.path.join(settings.log_dir, "system.log"),
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger

import sys
import os
import logging
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

os.environ.setdefault("database_url", "sqlite:///:memory:")
os.environ.setdefault("secret_key", "testsecret")

from app.core.config import get_settings
from app.core.logging_config import configure_logging


def test_configure_logging_installs_handlers_once():
    logger = configure_logging(get_settings())
    count = len(logger.handlers)
    assert count >= 1

    assert configure_logging(get_settings()) is logger
    assert len(logger.handlers) == count
    assert logger is logging.getLogger("app")
    assert not hasattr(logger, "_requisition_configured")

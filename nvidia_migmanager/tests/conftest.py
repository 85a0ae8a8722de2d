import logging
import os

import pytest

from nvidia_migmanager.logging_setup import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so handlers don't outlive captured streams."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep MIGMANAGER_* variables from the host out of the tests."""
    for key in list(os.environ):
        if key.startswith("MIGMANAGER_"):
            monkeypatch.delenv(key)

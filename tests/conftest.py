import logging

import pytest


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop the console handlers the CLI installs on the root logger."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)

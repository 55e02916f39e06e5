import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _restore_loguru():
    # configure_logging() swaps the stderr sink; tests that call it must not leak it
    yield
    logger.remove()
    logger.add(sys.__stderr__)

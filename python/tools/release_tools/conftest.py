import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added by the CLI so they never outlive a captured stream."""
    yield
    logger.remove()

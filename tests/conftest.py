# ABOUTME: Shared pytest fixtures for the arcwiki-extremes test suite
# ABOUTME: Drops loguru sinks a test installed so later tests never write to a closed stream

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru_sinks():
    yield
    logger.remove()

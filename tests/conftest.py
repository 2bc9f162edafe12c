import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _drop_log_sinks():
    # cli.main points loguru at the captured stderr of the running test
    yield
    logger.remove()

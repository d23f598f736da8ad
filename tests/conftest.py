import io

import pytest
import logging

from versionedmodel.versioning import VersioningRegistry


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("versionedmodel")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture
def registry():
    """A registry isolated from the module-level default one."""
    return VersioningRegistry()

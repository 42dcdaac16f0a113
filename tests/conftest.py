"""Root test configuration: session-level cleanup of runtime artifacts"""

import logging
import shutil
from pathlib import Path

import pytest

from vibecoder.util.logger import ROOT_LOGGER


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["vibecoder.db", "test.db"]
_CLEANUP_DIRS = ["exports"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files and export directories created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers the CLI callback bound to CliRunner's temporary streams."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

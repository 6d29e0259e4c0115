# Ensure project root is on sys.path for tests
import sys, pathlib
import pytest

root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from moodlines.core.logging import logger

@pytest.fixture(autouse=True)
def _reset_log_level():
    # DialogueManager applies the settings level to the shared logger
    yield
    logger.set_level("INFO")

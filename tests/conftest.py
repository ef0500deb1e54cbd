import logging
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import config_store
from config.config_store import ConfigStore
from tests.factories import make_resolver
from utils.logging import stop_logging


@pytest.fixture(autouse=True)
def _reset_process_store():
    """Every test starts with no process-wide store."""
    config_store.reset()
    yield
    config_store.reset()


@pytest.fixture
def store() -> ConfigStore:
    """A store loaded on a host reporting 'dash-01'."""
    return ConfigStore.load(make_resolver("dash-01"))


@pytest.fixture
def restore_root_logger():
    """Undo setup_logging(): stop the listener and drop its queue handler."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    stop_logging()
    root.setLevel(saved_level)

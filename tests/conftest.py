import os, sys
import pytest

# Ensure the project root is importable when running from a checkout
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

os.environ.setdefault("BLOCKSEAL_ENV", "dev")
os.environ.setdefault("BLOCKSEAL_LOG_JSON", "true")

from app.main import _startup
from app.store import reset_store

_startup()

# Reset the in-memory chain before each test for isolation
@pytest.fixture(autouse=True)
def _reset_store():
    reset_store()
    yield

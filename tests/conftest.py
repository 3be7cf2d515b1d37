import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'statefire' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from statefire.core.state import OperationRegistry
from statefire.core.stdlib_logging import reset_stdlib_logging_for_tests
from statefire.data import clear_caches
from helpers.subjects import Document, Recorder


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Drop STATEFIRE_* overrides from the developer shell and reset logging."""
    for key in list(os.environ):
        if key.startswith("STATEFIRE_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def operations(recorder: Recorder) -> OperationRegistry:
    """A private operation table with a few recording operations."""
    ops = OperationRegistry()
    ops.register("always", lambda subject, *args: True)
    ops.register("never", lambda subject, *args: False)
    ops.register("is_ready", lambda subject, *args: subject.ready)
    ops.register("stamp", recorder.op("stamp"))
    ops.register("log_attempt", recorder.op("log_attempt"))
    ops.register("notify", recorder.op("notify"))
    return ops


@pytest.fixture
def draft() -> Document:
    return Document("draft")

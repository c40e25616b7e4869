import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'viewdirective'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


from viewdirective.core.settings import build_settings, reset_defaults


@pytest.fixture(autouse=True)
def _fresh_defaults():
    """Restore bundled defaults around every test (they are process-wide)."""
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def settings():
    """Settings built from the bundled defaults only."""
    return build_settings()


class DictLoader:
    """In-memory host loader recording every call it receives."""

    def __init__(self, texts=None, values=None):
        self.texts = dict(texts or {})
        self.values = dict(values or {})
        self.text_requests = []
        self.batches = []

    def load_text(self, name):
        self.text_requests.append(name)
        return self.texts[name]

    def require(self, names):
        self.batches.append(list(names))
        return [self.values[name] for name in names]


@pytest.fixture
def dict_loader():
    """Factory for in-memory loaders."""
    return DictLoader

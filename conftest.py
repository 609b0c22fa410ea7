import sys
from pathlib import Path

import pytest

# Ensure 'src' directory is on sys.path for tests
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / 'src'
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path_factory, monkeypatch):
    """Keep preferences and GUI state out of the real user directories."""
    base = tmp_path_factory.mktemp("user")
    monkeypatch.setenv("INIEDIT_CONFIG_DIR", str(base / "config"))
    monkeypatch.setenv("INIEDIT_DATA_DIR", str(base / "data"))
    return base

import copy
import sys
from pathlib import Path

import pytest

import doppler_paths.core.config as doppler_config

# Add repo root to path so doppler_paths resolves without an install
_repo_root = Path(__file__).parent.parent
_repo_root_str = str(_repo_root)


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark test as slow (long salt searches)")
    if _repo_root_str not in sys.path:
        sys.path.insert(0, _repo_root_str)
    elif sys.path.index(_repo_root_str) > 0:
        sys.path.remove(_repo_root_str)
        sys.path.insert(0, _repo_root_str)


@pytest.fixture
def restore_global_config():
    original = copy.deepcopy(doppler_config.CONFIG)
    yield
    doppler_config.set_config(original)

"""Make the package importable from a source checkout."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from blockyaml import ParserConfig  # noqa: E402


@pytest.fixture
def config():
    """Default limits, isolated from BLOCKYAML_* variables in the environment."""
    return ParserConfig(_env_file=None, max_depth=64, step_limit=1_000_000)

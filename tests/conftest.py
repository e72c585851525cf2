import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import curtains` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def nested_source():
    """Build a container nested ``depth`` levels deep around ``x``."""
    def _build(depth: int) -> str:
        return '<container class="level">' * depth + "x" + "</container>" * depth
    return _build

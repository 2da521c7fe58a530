import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from repositories.memory import InMemoryCounterStore  # noqa: E402
from services.id_allocator import IdAllocator  # noqa: E402


@pytest.fixture
def allocator():
    """Allocator on a fresh in-memory counter store."""
    return IdAllocator(InMemoryCounterStore())

"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

# Add src directory to path so imports work without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moviegraph.graphql.context import OperationContext, build_context  # noqa: E402
from moviegraph.logging import clear_request_context  # noqa: E402
from moviegraph.store.base import Stores  # noqa: E402
from moviegraph.store.factory import create_memory_stores  # noqa: E402
from moviegraph.store.seed_data import seed_stores  # noqa: E402


@pytest_asyncio.fixture
async def stores() -> Stores:
    """Seeded in-memory stores."""
    memory_stores = create_memory_stores()
    await seed_stores(memory_stores)
    return memory_stores


@pytest.fixture
def make_context(stores: Stores):
    """Build a fresh operation context over the seeded stores."""

    def _make(caller_id: str | None = None, **kwargs: Any) -> OperationContext:
        return build_context(kwargs.pop("stores", stores), caller_id=caller_id, **kwargs)

    return _make


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables and logging context for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
    clear_request_context()


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")

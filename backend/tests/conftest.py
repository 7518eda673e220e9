"""Shared test fixtures.

Unit tests in tests/unit/ build their own dependencies; the ``client``
fixture below loads the full app for HTTP-level tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncIterator, Generator, cast

import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load .env.test when present (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture(autouse=True)
def _reset_metrics() -> Generator[None, None, None]:
    """Reset metrics before and after each test for isolation."""
    from metrics.daily_goals import reset_all

    reset_all()
    yield
    reset_all()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[Any]:
    """Async HTTP client for GraphQL/REST tests.

    Uses httpx.AsyncClient with an explicit ASGITransport and a dummy
    base_url so relative requests work.
    """
    from httpx import ASGITransport, AsyncClient

    from app import app

    transport = ASGITransport(app=cast(Any, app))
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

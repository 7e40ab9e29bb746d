from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))


async def _consume(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


@pytest.fixture
def resolve() -> Callable[[Awaitable[Any]], Any]:
    """Run a fresh event loop until ``awaitable`` settles."""

    def run(awaitable: Awaitable[Any]) -> Any:
        return asyncio.run(_consume(awaitable))

    return run

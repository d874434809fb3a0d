import asyncio
from typing import Awaitable, Optional, TypeVar

from recipe_pipeline.app.core.errors import DeadlineExceededError

T = TypeVar("T")


async def run_with_deadline(awaitable: Awaitable[T], timeout: Optional[float]) -> T:
    """Await ``awaitable``, cancelling it once ``timeout`` seconds have elapsed."""
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise DeadlineExceededError(f"operation exceeded {timeout:g}s deadline") from exc

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


def run_sync(coro: Awaitable[T]) -> T:
    """
    Run a coroutine to completion from synchronous code.

    Raises:
        RuntimeError: If called while an event loop is already running
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    coro.close()
    raise RuntimeError(
        "Cannot use sync method when async loop is already running. "
        "Use the async variant instead."
    )

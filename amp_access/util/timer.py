"""
Deadline race for awaitables that cannot be cancelled.

The awaited operation and the deadline settle a single result future; the
first one to arrive wins and the other is discarded. The operation itself is
never cancelled, only its outcome is ignored once the deadline has passed.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Set

from ..errors import AccessTimeoutError


logger = logging.getLogger(__name__)


async def timeout_race(
    awaitable: Awaitable[Any],
    timeout_ms: float,
    description: Optional[str] = None,
    abandoned: Optional[Set[asyncio.Future]] = None,
) -> Any:
    """
    Await ``awaitable`` but give up after ``timeout_ms`` milliseconds.

    Args:
        awaitable: Operation to race against the deadline
        timeout_ms: Deadline in milliseconds
        description: Optional label used in the timeout message
        abandoned: Set that holds the operation while it runs past the deadline

    Returns:
        The operation's result if it settles first

    Raises:
        AccessTimeoutError: If the deadline elapses first
        Exception: The operation's own error if it fails first
    """
    loop = asyncio.get_running_loop()
    result: asyncio.Future = loop.create_future()
    operation = asyncio.ensure_future(awaitable)

    def _on_operation_done(fut: asyncio.Future) -> None:
        if abandoned is not None:
            abandoned.discard(fut)
        if fut.cancelled():
            if not result.done():
                result.cancel()
            return

        error = fut.exception()
        if result.done():
            if error is not None:
                logger.warning(f"Ignoring failure after deadline: {error!r}")
            return

        if error is not None:
            result.set_exception(error)
        else:
            result.set_result(fut.result())

    def _on_deadline() -> None:
        if result.done():
            return
        label = description or "operation"
        result.set_exception(
            AccessTimeoutError(f"{label} timeout after {timeout_ms} ms", timeout_ms=timeout_ms)
        )

    operation.add_done_callback(_on_operation_done)
    deadline = loop.call_later(timeout_ms / 1000.0, _on_deadline)
    try:
        return await result
    finally:
        deadline.cancel()
        if abandoned is not None and not operation.done():
            abandoned.add(operation)

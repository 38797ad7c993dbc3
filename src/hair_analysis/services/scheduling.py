"""Helpers for cancellable asyncio tasks."""

import asyncio
from collections.abc import Iterable


def cancel_task(task: "asyncio.Task[None] | None") -> None:
    """Cancel a task unless it already finished or is the caller itself."""
    if task is None or task.done():
        return
    try:
        current = asyncio.current_task()
    except RuntimeError:
        current = None
    if task is current:
        return
    task.cancel()


async def wait_cancelled(tasks: "Iterable[asyncio.Task[None] | None]") -> None:
    """Wait for cancelled tasks to finish unwinding, ignoring their outcome."""
    current = asyncio.current_task()
    pending = [task for task in tasks if task is not None and task is not current]
    if pending:
        await asyncio.gather(*pending, return_exceptions=True)

"""Shared API dependencies."""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from fastapi import HTTPException, Request, status

from ..services.thread_service import ThreadService

logger = logging.getLogger(__name__)

# How often a running tree assembly checks whether its client went away
DISCONNECT_POLL_SECONDS = 0.1


def get_thread_service(request: Request) -> ThreadService:
    """Return the thread service created at application startup."""
    service = getattr(request.app.state, "thread_service", None)
    if service is None:
        logger.error("Thread service not initialized or unavailable.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Storage service unavailable",
        )
    return service


async def run_cancellable(
    request: Request,
    func: Callable[..., Any],
    *args,
    cancel: Optional[threading.Event] = None,
    poll_interval: float = DISCONNECT_POLL_SECONDS
) -> Any:
    """
    Run a blocking ThreadService read in a worker thread.

    ``func`` gets ``cancel=<Event>``; the event is set as soon as the client
    disconnects, which makes the assembly stop with OperationCancelledError
    before its next store call.

    Args:
        request: Incoming request, watched for disconnect
        func: ThreadService read method
        *args: Positional arguments for func
        cancel: Event to use instead of a fresh one
        poll_interval: Seconds between disconnect checks

    Returns:
        Whatever func returns
    """
    if cancel is None:
        cancel = threading.Event()

    async def watch_disconnect():
        while not cancel.is_set():
            if await request.is_disconnected():
                logger.info(f"Client disconnected, cancelling {request.method} {request.url.path}")
                cancel.set()
                return
            await asyncio.sleep(poll_interval)

    watcher = asyncio.create_task(watch_disconnect())
    try:
        return await asyncio.to_thread(func, *args, cancel=cancel)
    finally:
        watcher.cancel()
        try:
            await watcher
        except asyncio.CancelledError:
            pass

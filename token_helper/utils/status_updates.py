"""
Status update utilities for long-running operations.
"""
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

StatusCallback = Callable[[str], Union[None, Awaitable[None]]]

logger = logging.getLogger(__name__)

async def report_status(status_callback: Optional[StatusCallback], message: str) -> None:
    """
    Forward a status message to the caller's callback, if one was given.

    Both plain functions and coroutine functions are accepted.

    Args:
        status_callback (Optional[StatusCallback]): Function to call with status updates
        message (str): The status message
    """
    logger.debug(message)
    if status_callback is None:
        return

    result = status_callback(message)
    if inspect.isawaitable(result):
        await result

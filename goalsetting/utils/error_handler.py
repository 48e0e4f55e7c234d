"""Global error handler for the event loop."""

import asyncio
import logging
import traceback
from typing import Any

logger = logging.getLogger(__name__)


def error_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Log exceptions that escape background tasks.

    Installed with loop.set_exception_handler() so nothing raised in a stray
    task disappears silently.
    """
    message = context.get("message", "Unhandled exception in event loop")
    error = context.get("exception")

    if error is None:
        logger.error(message)
        return

    logger.error(f"{message}: {error}")

    # Log full traceback
    tb_list = traceback.format_exception(type(error), error, error.__traceback__)
    logger.error(f"Traceback:\n{''.join(tb_list)}")

"""
utils.py

Small helpers shared by the water column viewer.

- `safe_log_exception(msg, exc, **ctx)` : logs a fatal error with context
"""

from typing import Any
import sys
import logging

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: BaseException, **ctx: Any) -> None:
    """Log an exception together with keyword context.

    Uses `logger.error` with the exception's traceback attached. If the
    logging machinery itself fails (closed stream during interpreter
    shutdown), falls back to a compact line on `sys.stderr`.
    """
    exc_info = (type(exc), exc, exc.__traceback__)
    try:
        if ctx:
            ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
            logger.error('%s | %s | %s', msg, exc, ctx_s, exc_info=exc_info)
        else:
            logger.error('%s | %s', msg, exc, exc_info=exc_info)
    except (OSError, ValueError):
        sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')

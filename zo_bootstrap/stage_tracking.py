"""
Simple decorator for timing bootstrap stages in the logs.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable

logger = logging.getLogger(__name__)


def track_stage(stage_name: str) -> Callable:
    """
    Decorator to log the start, duration and outcome of a bootstrap stage.

    Usage:
        @track_stage("compose")
        def _compose(self, inputs):
            return env

    Failures are logged with their error type and re-raised unchanged.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.monotonic()
            logger.debug("Stage %s started", stage_name)

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug(
                    "Stage %s failed after %.3fs (%s)",
                    stage_name,
                    time.monotonic() - start_time,
                    type(e).__name__,
                )
                raise

            logger.debug(
                "Stage %s finished in %.3fs", stage_name, time.monotonic() - start_time
            )
            return result

        return wrapper

    return decorator

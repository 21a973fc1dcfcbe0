from __future__ import annotations
import logging
import os
from functools import wraps
from typing import Any, Callable

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator tracing calls at DEBUG level; failures are logged once and re-raised."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("Calling %s args=%s kwargs=%s", func.__name__, args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.debug("%s raised %s: %s", func.__name__, type(e).__name__, e)
                raise
            logger.debug("%s returned %s", func.__name__, type(result).__name__)
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``antbrain`` loggers.

    The level is DEBUG when ``verbose``, otherwise ``ANTBRAIN_LOG_LEVEL`` or WARNING.
    """
    resolved_level = "DEBUG" if verbose else (os.getenv("ANTBRAIN_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(level=resolved_level, format=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)

    app_logger = logging.getLogger("antbrain")
    app_logger.setLevel(resolved_level)
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger


__all__ = ["configure_logging", "log_calls"]

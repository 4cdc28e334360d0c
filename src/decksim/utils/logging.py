from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Log loader entry points at DEBUG and record failures before re-raising.

    Loaded scenarios and simulations carry whole decks, so only the type of
    the returned object is logged, never its repr.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("%s(%s)", func.__name__, ", ".join([*map(repr, args), *(f"{k}={v!r}" for k, v in kwargs.items())]))
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error("%s failed: %s", func.__name__, e, exc_info=logger.isEnabledFor(logging.DEBUG))
                raise
            logger.debug("%s -> %s", func.__name__, type(result).__name__)
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    """Send decksim log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT, force=True)

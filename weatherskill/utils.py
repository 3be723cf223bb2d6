import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

logger = structlog.get_logger()


def configure_logging() -> None:
    """
    Configure structlog for the entry points. The level is read from the
    LOG_LEVEL environment variable and defaults to INFO.
    """

    level = logging.getLevelNamesMapping().get(
        os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
    )
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


@contextmanager
def timed(name: str, **kwargs: Any) -> Iterator[None]:
    t = time.monotonic()
    try:
        yield
    finally:
        elapsed_ms = round((time.monotonic() - t) * 1000, 2)
        logger.debug(name, elapsed_ms=elapsed_ms, **kwargs)

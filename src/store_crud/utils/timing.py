import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


@contextmanager
def time_track(name: str) -> Iterator[None]:
    """Log how long the wrapped block took, at DEBUG level."""
    start_time = time.time()
    try:
        yield
    finally:
        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug("%s took %.2fms", name, elapsed_ms)

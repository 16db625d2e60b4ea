"""Console logging setup for the example service and scripts.

Library modules only create loggers with ``logging.getLogger(__name__)``;
installing handlers is left to whoever hosts the handlers.
"""

import logging
import sys

from store_crud.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Log level name. Defaults to settings.log_level.
    """
    root = logging.getLogger()
    level_name = (level or settings.log_level or "INFO").upper()
    resolved = getattr(logging, level_name, logging.INFO)
    root.setLevel(resolved)

    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    ):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handler.setLevel(resolved)
        root.addHandler(handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("httpx").setLevel(logging.WARNING)

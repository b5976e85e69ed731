"""Process logging for the docshare API."""
import logging
from typing import Optional

from ..config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "docshare"


def configure_logging(level: Optional[str] = None) -> int:
    """Set up root logging and the ``docshare`` logger level.

    ``level`` overrides ``Settings.log_level`` (``LOG_LEVEL`` in ``.env``).
    ``basicConfig`` is a no-op once the server has installed its own handlers,
    so the package logger level is set explicitly as well. Returns the
    numeric level applied.
    """
    name = (level or get_settings().log_level).upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
    return resolved

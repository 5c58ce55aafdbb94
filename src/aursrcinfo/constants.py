import logging
import platform
from os import getenv


def log_level(name: str | None, default: str = "WARNING") -> str:
    """Normalise a log level name, falling back to ``default`` for unknown names."""
    level = (name or default).upper()
    return level if level in logging.getLevelNamesMapping() else default


# log level for the command line front end
LOG_LEVEL = log_level(getenv("AURSRCINFO_LOG_LEVEL"))

# architecture used for per-architecture views when none is given
DEFAULT_ARCH = getenv("AURSRCINFO_ARCH") or platform.machine() or "x86_64"

# file looked up when a directory is given instead of a file
SRCINFO_FILENAME = ".SRCINFO"

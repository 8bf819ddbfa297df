"""
Logging setup shared by the API process
"""

import logging

from resort.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger once.
    Later calls only adjust the level.
    """
    global _configured

    resolved = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    if not _configured:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
        _configured = True
    else:
        logging.getLogger().setLevel(resolved)

    # pymongo's heartbeat chatter drowns out request logs at DEBUG
    logging.getLogger("pymongo").setLevel(max(resolved, logging.INFO))

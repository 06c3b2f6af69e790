"""Structured JSON logging for the lookup service."""
import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "domainscope"

# Per-request client logs from ruleset fetches
QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Send root logging to stdout as JSON lines.

    Every record carries a ``service`` field. ``level`` falls back to
    INFO when missing or not a logging level name.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s %(funcName)s',
        datefmt='%Y-%m-%dT%H:%M:%S%z',
        rename_fields={'asctime': 'timestamp', 'levelname': 'level'},
        static_fields={'service': SERVICE_NAME}
    ))
    root.addHandler(handler)

    resolved = logging.getLevelName((level or "INFO").upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root

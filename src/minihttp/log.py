"""
=============================================================================
LOGGING SETUP
=============================================================================

Every module logs through ``logging.getLogger(__name__)``, so all records
end up under the "minihttp" logger. setup_logging() decides where they go:

    ┌───────────────────────┬──────────────────────────────────────────────┐
    │  Record level         │  Destination                                 │
    ├───────────────────────┼──────────────────────────────────────────────┤
    │  DEBUG                │  stderr, only when verbose                   │
    │  INFO                 │  stdout                                      │
    │  WARNING and above    │  stderr                                      │
    └───────────────────────┴──────────────────────────────────────────────┘

Line format:

    2024-01-15 10:30:45 [WARNING] minihttp.http.request: Unable to parse header 'X'
    ─────────┬───────── ────┬──── ──────────┬────────── ──────────┬──────────
          asctime       levelname          name                message

=============================================================================
"""

import logging
import sys

LOGGER_NAME = "minihttp"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed by the last setup_logging() call
_installed: list = []


class _LevelFilter(logging.Filter):
    """Pass only INFO records, or only non-INFO records."""

    def __init__(self, info: bool):
        super().__init__()
        self.info = info

    def filter(self, record: logging.LogRecord) -> bool:
        return (record.levelno == logging.INFO) == self.info


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure the "minihttp" logger.

    Calling it again replaces the handlers of the previous call, so the
    verbosity can be changed without duplicating output.

    Args:
        verbose: Emit DEBUG records too.

    Returns:
        The configured "minihttp" logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in _installed:
        logger.removeHandler(handler)
    _installed.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_LevelFilter(info=True))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.addFilter(_LevelFilter(info=False))

    for handler in (stdout_handler, stderr_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed.append(handler)

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger

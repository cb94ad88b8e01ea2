"""Console logging for the ``conceptsync`` command."""

from __future__ import annotations

import logging

SYNC_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
VERBOSE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"

# Client libraries that log each request on their own.
_TRANSPORT_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Send sync progress to stderr.

    A normal run logs at INFO without logger names, so the output reads as a
    progress report of versions, batches, and the add/delete summary. ``verbose``
    drops to DEBUG, adds the logger name, and lets the httpx transport logs through.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=VERBOSE_FORMAT if verbose else SYNC_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

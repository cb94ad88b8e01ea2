from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from conceptsync.config import configure_logging
from conceptsync.config.logging import SYNC_FORMAT, VERBOSE_FORMAT

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def restore_logging() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    transport_levels = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name, transport_level in transport_levels.items():
        logging.getLogger(name).setLevel(transport_level)


def test_sync_run_logs_info_and_quiets_transport(restore_logging: logging.Logger) -> None:
    configure_logging(force=True)

    assert restore_logging.level == logging.INFO
    assert restore_logging.handlers[0].formatter is not None
    assert restore_logging.handlers[0].formatter._fmt == SYNC_FORMAT  # noqa: SLF001
    assert logging.getLogger("httpx").level == logging.WARNING


def test_verbose_logs_debug_with_logger_names(restore_logging: logging.Logger) -> None:
    configure_logging(verbose=True, force=True)

    assert restore_logging.level == logging.DEBUG
    assert restore_logging.handlers[0].formatter is not None
    assert restore_logging.handlers[0].formatter._fmt == VERBOSE_FORMAT  # noqa: SLF001
    assert logging.getLogger("httpcore").level == logging.DEBUG

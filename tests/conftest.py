"""Shared test fixtures."""

import logging
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def restore_logger_state() -> Iterator[None]:
    """Re-enable loggers that a test's ``dictConfig`` call disabled."""
    disabled = {
        name: lg.disabled
        for name, lg in logging.Logger.manager.loggerDict.items()
        if isinstance(lg, logging.Logger)
    }
    yield
    for name, lg in logging.Logger.manager.loggerDict.items():
        if isinstance(lg, logging.Logger):
            lg.disabled = disabled.get(name, False)

"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_prreviews_logger():
    """Undo setup_logging so later tests can capture records with caplog."""
    yield
    logger = logging.getLogger("prreviews")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

"""Shared fixtures."""

from __future__ import annotations

import logging

import pytest

from dictagger import Dictionary


@pytest.fixture(autouse=True)
def _restore_dictagger_logger():
    """CLI and API tests reconfigure the dictagger logger; put it back after each test."""
    logger = logging.getLogger("dictagger")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def medical_dictionary() -> Dictionary:
    return Dictionary.from_pairs([
        ("heart attack", "CONDITION"),
        ("diagnosis", "CONDITION"),
        ("aspirin tablet", "DRUG"),
    ])

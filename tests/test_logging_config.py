"""
Tests for logging helpers.
"""

import logging

import pytest

from dockscreen.logging_config import PACKAGE_LOGGER, get_logger, resolve_level, set_module_level


@pytest.mark.parametrize("level, expected", [(logging.DEBUG, 10), ("debug", 10), (" Warning ", 30), ("ERROR", 40)])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


def test_resolve_level_rejects_unknown_names():
    with pytest.raises(ValueError):
        resolve_level("chatty")


def test_set_module_level():
    logger = get_logger(f"{PACKAGE_LOGGER}.interaction")
    previous = logger.level
    try:
        set_module_level(f"{PACKAGE_LOGGER}.interaction", "debug")
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)

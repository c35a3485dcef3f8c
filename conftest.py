"""Adds opt-in/opt-out switches for the long-running key generation tests."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

SPEED_MARKERS = {
    "slow": ("--skip-slow", True, "Slow key generation: drop --skip-slow to run"),
    "extreme": ("--run-extreme", False, "Extreme key size: needs --run-extreme option"),
}


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extremely slow key sizes")


def pytest_collection_modifyitems(config, items):
    skips = {}
    for marker, (option, skip_when_set, reason) in SPEED_MARKERS.items():
        if config.getoption(option) == skip_when_set:
            skips[marker] = pytest.mark.skip(reason=reason)
    if not skips:
        return
    for item in items:
        for marker, skip in skips.items():
            if marker in item.keywords:
                item.add_marker(skip)

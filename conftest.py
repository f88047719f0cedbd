"""Configures pytest further: slow and extreme test selection."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extremely slow tests")


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: slower tests, skipped with --skip-slow")
    config.addinivalue_line("markers", "extreme: extremely slow tests, run with --run-extreme")


def pytest_collection_modifyitems(config, items):
    skips = {}
    if config.getoption("--skip-slow"):
        skips["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skips["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    for item in items:
        for keyword, marker in skips.items():
            if keyword in item.keywords:
                item.add_marker(marker)

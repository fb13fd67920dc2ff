# rulefsm/tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from rulefsm.core.machine import StateHolder
from rulefsm.core.ruleset import Ruleset, create_ruleset
from rulefsm.core.transitions import Transition


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "timing: mark test as asserting on wall-clock latency")
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def order_rules() -> Ruleset:
    """pending -> started -> finished, default guards only."""
    return create_ruleset(Transition("pending", "started"), Transition("started", "finished"))


@pytest.fixture
def pending_subject() -> StateHolder:
    return StateHolder("pending")

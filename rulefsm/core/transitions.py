# rulefsm/core/transitions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, NamedTuple

from rulefsm.core.states import identity_of
from rulefsm.interfaces.types import Identity


class Transition(NamedTuple):
    """
    An allowed change between two states, keyed by the states' identities.

    Used purely as an exact-match lookup key into a :class:`Ruleset`. Two
    transitions are equal when both their origin and exit identities are equal.
    """

    origin: Identity
    exit: Identity

    @classmethod
    def between(cls, start: Any, goal: Any) -> "Transition":
        """
        Build a transition from two states, IDers or raw identities.

        :param start: The state the transition leaves.
        :param goal: The state the transition enters.
        """
        return cls(identity_of(start), identity_of(goal))

    def __str__(self) -> str:
        return f"{self.origin} -> {self.exit}"

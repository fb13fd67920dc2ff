# rulefsm/core/machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any

from rulefsm.core.ruleset import Ruleset
from rulefsm.interfaces.protocols import Subject

logger = logging.getLogger(__name__)


class StateHolder:
    """
    Minimal in-memory subject, for hosts with no domain object of their own.
    """

    def __init__(self, state: Any = None) -> None:
        self.current_state = state

    def set_state(self, state: Any) -> None:
        self.current_state = state

    def __repr__(self) -> str:
        return f"StateHolder({self.current_state!r})"


class Machine:
    """
    Pairs a rule set with a subject and moves the subject between states.

    The machine holds no locks. Concurrent calls to :meth:`transition` for the
    same subject race on reading and writing its state and must be serialized
    by the caller.
    """

    def __init__(self, rules: Ruleset, subject: Subject) -> None:
        """
        :param rules: The rule set deciding which transitions are permitted.
        :param subject: The entity whose state is governed; owned by the caller.
        """
        self.rules = rules
        self.subject = subject

    @property
    def state(self) -> Any:
        """The subject's current state."""
        return self.subject.current_state

    def transition(self, goal: Any) -> None:
        """
        Attempt to move the subject to ``goal``. The subject's state is written
        only after every guard has allowed the move.

        :param goal: The requested state.
        :raises TransitionError: If the move is not permitted; the subject is left untouched.
        """
        current = self.subject.current_state
        self.rules.permitted(current, goal)
        self.subject.set_state(goal)
        logger.debug("Subject moved from %s to %s", current, goal)

    def can_transition(self, goal: Any) -> bool:
        """
        Report whether :meth:`transition` to ``goal`` would currently succeed.
        Guards are run, so any side effects they have still happen.
        """
        return self.rules.is_permitted(self.subject.current_state, goal)

# rulefsm/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from rulefsm.core.transitions import Transition


class FSMError(Exception):
    """
    Base exception class for errors raised by the rule-set state machine library.

    :param message: Human readable description of the failure.
    :param details: Optional structured context about the failure.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransitionError(FSMError):
    """
    Raised when an attempted state transition is not permitted.
    """

    def __init__(
        self,
        message: str,
        transition: Optional["Transition"] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.transition = transition


class NoRuleForTransition(TransitionError):
    """
    Raised when the (origin, goal) pair has no entry in the rule set. No guard
    is ever run for such a pair.
    """

    def __init__(self, transition: "Transition", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            f"No rules found for {transition.origin} to {transition.exit}",
            transition=transition,
            details=details,
        )


class GuardDenied(TransitionError):
    """
    Raised when a guard rejects a transition. The string form is the guard's
    reason, so guards can raise ``GuardDenied("not enough funds")`` directly.
    """

    def __init__(
        self,
        reason: str,
        transition: Optional["Transition"] = None,
        guard: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(reason, transition=transition, details=details)
        self.reason = reason
        self.guard = guard


class InvalidTransitionAttempt(GuardDenied):
    """
    Raised by the default guard when the subject's current state does not match
    the origin the transition was registered with.
    """

    def __init__(self, current: Any, goal: Any, transition: Optional["Transition"] = None) -> None:
        super().__init__(f"Cannot transition from {current} to {goal}", transition=transition)
        self.current = current
        self.goal = goal


class ValidationError(FSMError):
    """
    Raised when a rule set is misconfigured.
    """
